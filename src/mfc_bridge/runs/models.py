"""Workflow run records."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

RunState = Literal["pending", "running", "done", "error"]


class RunStep(BaseModel):
    """One planned step. Assignment is validated so an executor can advance it."""

    model_config = ConfigDict(validate_assignment=True)

    id: str
    state: RunState


class Run(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, validate_assignment=True
    )

    run_id: str
    workflow_id: str
    status: RunState
    started_at: str
    finished_at: str | None = None
    steps: list[RunStep] = Field(default_factory=list)
