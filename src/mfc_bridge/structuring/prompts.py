"""Prompt text for the task structuring call."""

from __future__ import annotations

from mfc_bridge.structuring.models import IncomingTask, NextStep, Priority

SYSTEM_PROMPT = (
    "You turn loosely written development tasks into a structured task record. "
    "Return ONLY a single JSON object. No prose, no explanations, no Markdown, "
    "no code fences. Use exactly these keys: "
    "originalTaskId (string), goal (string), contextSummary (string), "
    "knowledgeRequirements (array of strings), subtasks (array of strings), "
    "constraints (array of strings), successCriteria (array of strings), "
    f"priority (one of {', '.join(p.value for p in Priority)}), "
    f"recommendedNextStep (one of {', '.join(s.value for s in NextStep)}), "
    "notesForExecutor (string), notesForHuman (string or null). "
    "Use empty arrays or empty strings when the task gives no information. "
    "Do not add other keys."
)


def build_user_prompt(task: IncomingTask) -> str:
    created_at = task.created_at.isoformat() if task.created_at else "unknown"
    return (
        "Structure the following task.\n\n"
        f"Task id: {task.id}\n"
        f"Author: {task.author or 'unknown'}\n"
        f"Created at: {created_at}\n\n"
        f"Task text:\n{task.raw_text}\n\n"
        f'Set "originalTaskId" to "{task.id}".'
    )
