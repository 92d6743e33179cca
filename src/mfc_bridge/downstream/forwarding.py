from __future__ import annotations

import logging

from mfc_bridge.downstream.http import (
    JsonTransport,
    RemoteCallResult,
    RemoteStatusError,
    RemoteSuccess,
    RemoteTransportError,
    send_json,
)
from mfc_bridge.structuring.models import StructuredTask

logger = logging.getLogger(__name__)

STRUCTURED_TASKS_PATH = "/api/structured-tasks"


class ForwardingClient:
    """Best-effort push of structured tasks to the downstream executor."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout_s: float | None = None,
        transport: JsonTransport = send_json,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport

    def forward(self, task: StructuredTask) -> RemoteCallResult:
        """Send one task. Failures are logged; nothing is raised."""
        url = f"{self.base_url}{STRUCTURED_TASKS_PATH}"
        try:
            result = self._transport(
                "POST",
                url,
                payload=task.model_dump(mode="json", by_alias=True),
                timeout_s=self.timeout_s,
            )
        except Exception as exc:  # noqa: BLE001
            result = RemoteTransportError(reason=str(exc) or type(exc).__name__)

        if isinstance(result, RemoteSuccess):
            logger.info(
                "forward event=delivered original_task_id=%s status=%s",
                task.original_task_id,
                result.status,
            )
        elif isinstance(result, RemoteStatusError):
            logger.warning(
                "forward event=rejected original_task_id=%s status=%s body=%s",
                task.original_task_id,
                result.status,
                result.body_text[:200],
            )
        elif isinstance(result, RemoteTransportError):
            logger.warning(
                "forward event=transport_error original_task_id=%s reason=%s",
                task.original_task_id,
                result.reason,
            )
        return result
