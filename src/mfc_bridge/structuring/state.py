"""Typed state contract for the structuring graph."""

from typing import Any, TypedDict

from mfc_bridge.structuring.models import IncomingTask, StructuredTask


class StructuringState(TypedDict, total=False):
    task: IncomingTask
    raw_response: Any
    response_text: str | None
    json_text: str
    structured_task: StructuredTask | None
    failure: str | None


def initial_state(task: IncomingTask) -> StructuringState:
    return {
        "task": task,
        "raw_response": None,
        "response_text": None,
        "json_text": "",
        "structured_task": None,
        "failure": None,
    }
