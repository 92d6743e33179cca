"""Task structuring pipeline."""

from mfc_bridge.structuring.models import (
    IncomingTask,
    IngestTaskResponse,
    NextStep,
    Priority,
    StructuredTask,
)
from mfc_bridge.structuring.sanitize import strip_json_fences
from mfc_bridge.structuring.structurer import TaskStructurer

__all__ = [
    "IncomingTask",
    "IngestTaskResponse",
    "NextStep",
    "Priority",
    "StructuredTask",
    "TaskStructurer",
    "strip_json_fences",
]
