import pytest

from fakes import RecordingTransport
from mfc_bridge.config.settings import Settings
from mfc_bridge.downstream.http import RemoteStatusError, RemoteSuccess, RemoteTransportError
from mfc_bridge.llm.client import ModelCallError, OpenAIChatCompletionsAdapter, build_llm_adapter


def test_adapter_posts_chat_completion_and_returns_raw_envelope() -> None:
    envelope = {"choices": [{"message": {"content": "{}"}}]}
    transport = RecordingTransport(result=RemoteSuccess(status=200, body=envelope))
    adapter = OpenAIChatCompletionsAdapter(
        api_key="sk-test",
        model="gpt-4o-mini",
        base_url="https://llm.test/v1/",
        transport=transport,
    )

    assert adapter.complete(system_prompt="sys", user_prompt="user") == envelope

    request = transport.requests[0]
    assert request["method"] == "POST"
    assert request["url"] == "https://llm.test/v1/chat/completions"
    assert request["headers"]["Authorization"] == "Bearer sk-test"
    assert request["payload"]["messages"][0] == {"role": "system", "content": "sys"}
    assert request["payload"]["messages"][1] == {"role": "user", "content": "user"}


@pytest.mark.parametrize(
    "result",
    [
        RemoteStatusError(status=429, body_text="rate limited"),
        RemoteTransportError(reason="timed out"),
    ],
)
def test_adapter_raises_model_call_error_on_failure(result) -> None:
    transport = RecordingTransport(result=result)
    adapter = OpenAIChatCompletionsAdapter(api_key="sk-test", transport=transport)

    with pytest.raises(ModelCallError):
        adapter.complete(system_prompt="sys", user_prompt="user")
    assert len(transport.requests) == 1


def test_build_llm_adapter_requires_api_key(monkeypatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    assert build_llm_adapter(Settings(openai_api_key="")) is None


def test_build_llm_adapter_uses_legacy_env_key(monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

    adapter = build_llm_adapter(Settings(openai_api_key="", llm_model="gpt-test"))

    assert adapter is not None
    assert adapter.model == "gpt-test"
