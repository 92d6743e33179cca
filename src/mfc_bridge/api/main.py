"""FastAPI app entrypoint for mfc-bridge."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import BackgroundTasks, Body, FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from mfc_bridge.config.settings import Settings, get_settings
from mfc_bridge.downstream.forwarding import ForwardingClient
from mfc_bridge.downstream.workflows import WorkflowCatalog, WorkflowDef
from mfc_bridge.llm.client import build_llm_adapter
from mfc_bridge.runs import InMemoryRunRegistry, Run, RunLifecycleController, RunRegistry
from mfc_bridge.runs.registry import RunNotFoundError
from mfc_bridge.structuring import IncomingTask, IngestTaskResponse, TaskStructurer

logger = logging.getLogger(__name__)

INGEST_PATH = "/tasks/from-mfc"


def create_app(
    *,
    settings_override: Settings | None = None,
    registry: RunRegistry | None = None,
    structurer: TaskStructurer | None = None,
    forwarder: ForwardingClient | None = None,
    catalog: WorkflowCatalog | None = None,
) -> FastAPI:
    settings = settings_override or get_settings()
    downstream_base_url = settings.resolved_downstream_base_url()

    app = FastAPI(title=settings.app_name, version="0.2.0")
    # Shared objects live in app.state so route handlers can reuse them.
    app.state.settings = settings
    app.state.structurer = structurer or TaskStructurer(build_llm_adapter(settings))
    app.state.forwarder = forwarder or ForwardingClient(
        base_url=downstream_base_url,
        timeout_s=settings.downstream_timeout_s,
    )
    app.state.catalog = catalog or WorkflowCatalog(
        base_url=downstream_base_url,
        timeout_s=settings.downstream_timeout_s,
    )
    app.state.runs = RunLifecycleController(registry or InMemoryRunRegistry())

    @app.exception_handler(RunNotFoundError)
    def run_not_found(_request: Request, exc: RunNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={"error": "Run not found", "runId": exc.run_id},
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Unparseable ingestion bodies get the same 400 shape as a missing task.
        if request.url.path == INGEST_PATH:
            return JSONResponse(
                status_code=400,
                content={"error": "Request body must be a JSON object with a 'task' field."},
            )
        return await request_validation_exception_handler(request, exc)

    @app.get("/health")
    def health(request: Request) -> dict[str, Any]:
        return {
            "ok": True,
            "service": settings.app_name,
            "message": "mfc-bridge is running (workflows via MFC)",
            "downstreamBaseUrl": downstream_base_url,
            "structuringEnabled": request.app.state.structurer.enabled,
        }

    @app.post(INGEST_PATH, response_model=IngestTaskResponse, response_model_by_alias=True)
    def ingest_task(
        request: Request,
        background_tasks: BackgroundTasks,
        payload: Any = Body(default=None),
    ) -> IngestTaskResponse | JSONResponse:
        if not isinstance(payload, dict) or payload.get("task") is None:
            return JSONResponse(
                status_code=400,
                content={"error": "Request body must contain a 'task' object."},
            )
        try:
            task = IncomingTask.model_validate(payload["task"])
        except ValidationError as exc:
            return JSONResponse(
                status_code=400,
                content={
                    "error": "Field 'task' is not a valid task.",
                    "details": exc.errors(
                        include_url=False, include_context=False, include_input=False
                    ),
                },
            )

        logger.info("ingest event=received task_id=%s author=%s", task.id, task.author)
        try:
            structured = request.app.state.structurer.structure(task)
        except Exception as exc:  # noqa: BLE001
            logger.error("ingest event=structuring_failed task_id=%s error=%s", task.id, exc)
            structured = None

        if structured is None:
            return IngestTaskResponse(structured_task=None)

        # Runs after the response is sent; its outcome never changes the response.
        background_tasks.add_task(request.app.state.forwarder.forward, structured)
        logger.info(
            "ingest event=forward_scheduled task_id=%s original_task_id=%s",
            task.id,
            structured.original_task_id,
        )
        return IngestTaskResponse(structured_task=structured)

    @app.get("/workflows", response_model=list[WorkflowDef])
    def list_workflows(request: Request) -> list[WorkflowDef]:
        return request.app.state.catalog.list_workflows()

    @app.post("/workflows/{workflow_id}/start", response_model=Run, status_code=202)
    def start_workflow(workflow_id: str, request: Request) -> Run:
        return request.app.state.runs.start(workflow_id)

    @app.get("/runs/{run_id}", response_model=Run)
    def get_run(run_id: str, request: Request) -> Run:
        return request.app.state.runs.get(run_id)

    @app.get("/runs", response_model=list[Run])
    def list_runs(request: Request) -> list[Run]:
        return request.app.state.runs.list()

    return app


# Module-level app for `uvicorn mfc_bridge.api.main:app`.
app = create_app()
