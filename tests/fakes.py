"""Test doubles shared by unit and integration tests."""

from __future__ import annotations

from typing import Any

from mfc_bridge.downstream.http import RemoteCallResult, RemoteSuccess


def structured_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "originalTaskId": "mfc-42",
        "goal": "Add a health check to the flight board",
        "contextSummary": "The board has no liveness probe.",
        "knowledgeRequirements": ["FastAPI routing"],
        "subtasks": ["Add /health route", "Add test"],
        "constraints": ["No new dependencies"],
        "successCriteria": ["GET /health returns 200"],
        "priority": "MEDIUM",
        "recommendedNextStep": "SEND_TO_EXECUTOR",
        "notesForExecutor": "Keep it small.",
        "notesForHuman": None,
    }
    payload.update(overrides)
    return payload


def chat_envelope(content: str) -> dict[str, Any]:
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


class FakeAdapter:
    """LLM adapter double: returns a canned envelope or raises."""

    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.model = "fake-model"
        self.response = response
        self.error = error
        self.calls: list[dict[str, str]] = []

    def complete(self, *, system_prompt: str, user_prompt: str) -> Any:
        self.calls.append({"system_prompt": system_prompt, "user_prompt": user_prompt})
        if self.error is not None:
            raise self.error
        return self.response


class RecordingTransport:
    """JSON transport double that records requests and replays one result."""

    def __init__(self, result: RemoteCallResult | None = None, error: Exception | None = None):
        self.result = result or RemoteSuccess(status=200, body=None)
        self.error = error
        self.requests: list[dict[str, Any]] = []

    def __call__(
        self,
        method: str,
        url: str,
        *,
        payload: Any = None,
        headers: dict[str, str] | None = None,
        timeout_s: float | None = None,
    ) -> RemoteCallResult:
        self.requests.append(
            {"method": method, "url": url, "payload": payload, "headers": headers or {}}
        )
        if self.error is not None:
            raise self.error
        return self.result


