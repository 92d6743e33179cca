"""Run creation and status queries.

Runs are recorded, not executed: once created they are only read back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from mfc_bridge.runs.models import Run, RunStep
from mfc_bridge.runs.registry import RunNotFoundError, RunRegistry

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2026-01-31T09:15:02.123Z."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def make_run_id(started_at: str, workflow_id: str) -> str:
    return f"run-{started_at.replace(':', '-').replace('.', '-')}-{workflow_id}"


class RunLifecycleController:
    def __init__(
        self,
        registry: RunRegistry,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.registry = registry
        self._clock = clock

    def start(self, workflow_id: str) -> Run:
        # Any workflow id is accepted; it is not checked against the catalog.
        started_at = format_timestamp(self._clock())
        run_id = self.registry.reserve_id(make_run_id(started_at, workflow_id))
        run = Run(
            run_id=run_id,
            workflow_id=workflow_id,
            status="running",
            started_at=started_at,
            finished_at=None,
            steps=[
                RunStep(id=f"{workflow_id}-step-1", state="running"),
                RunStep(id=f"{workflow_id}-step-2", state="pending"),
            ],
        )
        stored = self.registry.save(run)
        logger.info(
            "run_lifecycle event=start run_id=%s workflow_id=%s status=%s",
            stored.run_id,
            workflow_id,
            stored.status,
        )
        return stored

    def get(self, run_id: str) -> Run:
        run = self.registry.get(run_id)
        if run is None:
            raise RunNotFoundError(run_id)
        return run

    def list(self) -> list[Run]:
        return self.registry.list()
