"""Workflow listing from the control plane, with a built-in fallback."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from mfc_bridge.downstream.http import (
    JsonTransport,
    RemoteSuccess,
    RemoteTransportError,
    describe,
    send_json,
)

logger = logging.getLogger(__name__)

WORKFLOWS_PATH = "/api/workflows"


class WorkflowDef(BaseModel):
    id: str
    label: str
    description: str


FALLBACK_WORKFLOWS: tuple[WorkflowDef, ...] = (
    WorkflowDef(
        id="dev-start",
        label="Dev-Start (MFC)",
        description="Startet die Dev-Umgebung für Meventa Flight Control.",
    ),
    WorkflowDef(
        id="hueter-dev-session",
        label="Hüter-Dev-Session",
        description=(
            "Geführte Session, um an Hüter / Meventa zu entwickeln "
            "(Planung + 1 Fokus-Aufgabe)."
        ),
    ),
)


class WorkflowListingError(ValueError):
    """Control plane answered, but not with a usable workflow list."""


class WorkflowCatalog:
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

    def list_workflows(self) -> list[WorkflowDef]:
        url = f"{self.base_url}{WORKFLOWS_PATH}"
        try:
            result = self._transport("GET", url, timeout_s=self.timeout_s)
        except Exception as exc:  # noqa: BLE001
            result = RemoteTransportError(reason=str(exc) or type(exc).__name__)
        if not isinstance(result, RemoteSuccess):
            logger.warning("workflows event=fallback reason=%s", describe(result))
            return fallback_workflows()

        try:
            return _map_workflows(result.body)
        except WorkflowListingError as exc:
            logger.warning("workflows event=fallback reason=%s", exc)
            return fallback_workflows()


def fallback_workflows() -> list[WorkflowDef]:
    return [item.model_copy() for item in FALLBACK_WORKFLOWS]


def _map_workflows(body: Any) -> list[WorkflowDef]:
    if not isinstance(body, dict) or not isinstance(body.get("workflows"), list):
        raise WorkflowListingError("unexpected response structure from /api/workflows")

    output: list[WorkflowDef] = []
    for item in body["workflows"]:
        if not isinstance(item, dict) or item.get("id") is None:
            raise WorkflowListingError(f"workflow entry without id: {item!r}")
        workflow_id = str(item["id"])
        output.append(
            WorkflowDef(
                id=workflow_id,
                label=str(item.get("label") or workflow_id),
                description=str(item.get("description") or ""),
            )
        )
    return output
