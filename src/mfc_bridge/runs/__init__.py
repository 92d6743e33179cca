"""Workflow run tracking."""

from mfc_bridge.runs.lifecycle import RunLifecycleController
from mfc_bridge.runs.models import Run, RunState, RunStep
from mfc_bridge.runs.registry import InMemoryRunRegistry, RunNotFoundError, RunRegistry

__all__ = [
    "InMemoryRunRegistry",
    "Run",
    "RunLifecycleController",
    "RunNotFoundError",
    "RunRegistry",
    "RunState",
    "RunStep",
]
