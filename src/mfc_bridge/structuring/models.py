"""Wire models for task ingestion and structuring."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Priority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class NextStep(str, Enum):
    SEND_TO_EXECUTOR = "SEND_TO_EXECUTOR"
    ASK_HUMAN_FOR_INFO = "ASK_HUMAN_FOR_INFO"
    NEEDS_DESIGN_DECISION = "NEEDS_DESIGN_DECISION"
    JUST_INFORMATION = "JUST_INFORMATION"
    UNKNOWN = "UNKNOWN"


class IncomingTask(CamelModel):
    """Task as produced by the control plane. Only a few fields are read."""

    id: str = Field(min_length=1)
    raw_text: str
    state: str | None = None
    author: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class StructuredTask(CamelModel):
    """Normalized task record handed to the downstream executor."""

    original_task_id: str = ""
    goal: str
    context_summary: str = ""
    knowledge_requirements: list[str] = Field(default_factory=list)
    subtasks: list[str] = Field(default_factory=list)
    constraints: list[str] = Field(default_factory=list)
    success_criteria: list[str] = Field(default_factory=list)
    priority: Priority
    recommended_next_step: NextStep
    notes_for_executor: str = ""
    notes_for_human: str | None = None

    @field_validator("priority", "recommended_next_step", mode="before")
    @classmethod
    def _upper_enum_value(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value


class IngestTaskResponse(CamelModel):
    ok: bool = True
    received: bool = True
    structured_task: StructuredTask | None = None
