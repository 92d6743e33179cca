from __future__ import annotations

import logging
from typing import Any, Protocol

from mfc_bridge.config.settings import Settings
from mfc_bridge.downstream.http import (
    JsonTransport,
    RemoteStatusError,
    RemoteSuccess,
    RemoteTransportError,
    send_json,
)

logger = logging.getLogger(__name__)


class ModelCallError(RuntimeError):
    """Provider call failed at the transport level or with a non-success status."""


class LLMAdapter(Protocol):
    """Interface for a single raw model completion."""

    model: str

    def complete(self, *, system_prompt: str, user_prompt: str) -> Any: ...


class OpenAIChatCompletionsAdapter:
    """Small OpenAI adapter using the chat completions REST API.

    Returns the provider envelope untouched; text extraction happens in
    `mfc_bridge.llm.envelope`. One attempt per call.
    """

    def __init__(
        self,
        *,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str = "https://api.openai.com/v1",
        timeout_s: float | None = None,
        transport: JsonTransport = send_json,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport

    def complete(self, *, system_prompt: str, user_prompt: str) -> Any:
        url = f"{self.base_url}/chat/completions"
        payload = {
            "model": self.model,
            "temperature": 0,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }
        result = self._transport(
            "POST",
            url,
            payload=payload,
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout_s=self.timeout_s,
        )
        if isinstance(result, RemoteSuccess):
            logger.debug("llm_call event=ok model=%s status=%s", self.model, result.status)
            return result.body
        if isinstance(result, RemoteStatusError):
            raise ModelCallError(
                f"OpenAI request failed with status {result.status}: {result.body_text}"
            )
        if isinstance(result, RemoteTransportError):
            raise ModelCallError(f"OpenAI request failed: {result.reason}")
        raise ModelCallError(f"Unexpected transport result: {result!r}")


def build_llm_adapter(settings: Settings) -> LLMAdapter | None:
    """Return None when no provider credential is configured."""
    api_key = settings.resolved_openai_api_key()
    if not api_key:
        return None
    return OpenAIChatCompletionsAdapter(
        api_key=api_key,
        model=settings.llm_model,
        base_url=settings.llm_base_url,
        timeout_s=settings.llm_timeout_s,
    )
