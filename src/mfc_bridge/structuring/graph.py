"""LangGraph pipeline: one model call, then extract, sanitize and decode."""

from __future__ import annotations

import json
import logging
from typing import Any

from langgraph.graph import END, StateGraph
from pydantic import ValidationError

from mfc_bridge.llm.client import LLMAdapter
from mfc_bridge.llm.envelope import extract_response_text
from mfc_bridge.structuring.models import StructuredTask
from mfc_bridge.structuring.prompts import SYSTEM_PROMPT, build_user_prompt
from mfc_bridge.structuring.sanitize import strip_json_fences
from mfc_bridge.structuring.state import StructuringState

logger = logging.getLogger(__name__)


def build_structuring_graph(adapter: LLMAdapter):
    def call_model(state: StructuringState) -> StructuringState:
        task = state["task"]
        # ModelCallError propagates out of graph.invoke to the caller.
        raw_response = adapter.complete(
            system_prompt=SYSTEM_PROMPT,
            user_prompt=build_user_prompt(task),
        )
        return {"raw_response": raw_response}

    def _route_after_extract(state: StructuringState) -> str:
        return "failed" if state.get("failure") else "ok"

    graph = StateGraph(StructuringState)

    graph.add_node("call_model", call_model)
    graph.add_node("extract_text", extract_text)
    graph.add_node("sanitize", sanitize)
    graph.add_node("decode", decode)

    graph.set_entry_point("call_model")
    graph.add_edge("call_model", "extract_text")
    graph.add_conditional_edges(
        "extract_text", _route_after_extract, {"ok": "sanitize", "failed": END}
    )
    graph.add_edge("sanitize", "decode")
    graph.add_edge("decode", END)

    return graph.compile()


def extract_text(state: StructuringState) -> StructuringState:
    raw_response = state.get("raw_response")
    text = extract_response_text(raw_response)
    if text is None:
        logger.warning(
            "structuring event=no_text task_id=%s raw_response=%s",
            state["task"].id,
            _dump_for_log(raw_response),
        )
        return {"response_text": None, "failure": "unrecognized_envelope"}
    return {"response_text": text}


def sanitize(state: StructuringState) -> StructuringState:
    return {"json_text": strip_json_fences(state.get("response_text") or "")}


def decode(state: StructuringState) -> StructuringState:
    task = state["task"]
    json_text = state.get("json_text", "")
    try:
        parsed = json.loads(json_text)
    except json.JSONDecodeError as exc:
        logger.warning(
            "structuring event=invalid_json task_id=%s error=%s text=%s",
            task.id,
            exc,
            json_text,
        )
        return {"structured_task": None, "failure": "invalid_json"}

    if not isinstance(parsed, dict):
        logger.warning(
            "structuring event=not_an_object task_id=%s text=%s", task.id, json_text
        )
        return {"structured_task": None, "failure": "not_an_object"}

    payload: dict[str, Any] = dict(parsed)
    original_task_id = payload.get("originalTaskId")
    if original_task_id is None or (
        isinstance(original_task_id, str) and not original_task_id.strip()
    ):
        payload["originalTaskId"] = task.id

    try:
        structured = StructuredTask.model_validate(payload)
    except ValidationError as exc:
        logger.warning(
            "structuring event=schema_mismatch task_id=%s errors=%s text=%s",
            task.id,
            exc.errors(include_url=False),
            json_text,
        )
        return {"structured_task": None, "failure": "schema_mismatch"}

    return {"structured_task": structured, "failure": None}


def _dump_for_log(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return repr(value)
