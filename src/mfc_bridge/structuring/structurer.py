"""Free-text task -> StructuredTask via one model call."""

from __future__ import annotations

import logging

from mfc_bridge.llm.client import LLMAdapter
from mfc_bridge.structuring.graph import build_structuring_graph
from mfc_bridge.structuring.models import IncomingTask, StructuredTask
from mfc_bridge.structuring.state import initial_state

logger = logging.getLogger(__name__)


class TaskStructurer:
    """Runs the structuring graph, or does nothing when no model is configured."""

    def __init__(self, adapter: LLMAdapter | None) -> None:
        self.adapter = adapter
        self._graph = build_structuring_graph(adapter) if adapter is not None else None

    @property
    def enabled(self) -> bool:
        return self._graph is not None

    def structure(self, task: IncomingTask) -> StructuredTask | None:
        """Return a StructuredTask, or None when disabled or the output is unusable.

        Provider transport and status failures raise `ModelCallError`; the
        ingestion route treats that the same as None.
        """
        if self._graph is None:
            logger.info("structuring event=disabled task_id=%s reason=no_api_key", task.id)
            return None

        result = self._graph.invoke(initial_state(task))
        structured = result.get("structured_task")
        if structured is None:
            logger.info(
                "structuring event=no_result task_id=%s failure=%s",
                task.id,
                result.get("failure"),
            )
            return None

        logger.info(
            "structuring event=structured task_id=%s priority=%s next_step=%s",
            task.id,
            structured.priority.value,
            structured.recommended_next_step.value,
        )
        return structured
