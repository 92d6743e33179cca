import logging

import pytest

from fakes import RecordingTransport
from mfc_bridge.downstream.http import RemoteStatusError, RemoteSuccess, RemoteTransportError
from mfc_bridge.downstream.workflows import WorkflowCatalog, fallback_workflows


def test_downstream_workflows_are_mapped() -> None:
    body = {
        "workflows": [
            {"id": "deploy", "label": "Deploy", "description": "Ship to prod"},
            {"id": 7},
        ]
    }
    transport = RecordingTransport(result=RemoteSuccess(status=200, body=body))

    workflows = WorkflowCatalog(base_url="http://mfc.test", transport=transport).list_workflows()

    assert [w.model_dump() for w in workflows] == [
        {"id": "deploy", "label": "Deploy", "description": "Ship to prod"},
        {"id": "7", "label": "7", "description": ""},
    ]
    assert transport.requests[0]["url"] == "http://mfc.test/api/workflows"
    assert transport.requests[0]["method"] == "GET"


@pytest.mark.parametrize(
    "result",
    [
        RemoteTransportError(reason="connection refused"),
        RemoteStatusError(status=500, body_text="boom"),
        RemoteSuccess(status=200, body=None),
        RemoteSuccess(status=200, body={"items": []}),
        RemoteSuccess(status=200, body={"workflows": "nope"}),
        RemoteSuccess(status=200, body={"workflows": [{"label": "no id"}]}),
    ],
)
def test_any_failure_falls_back_to_builtin_list(result, caplog) -> None:
    catalog = WorkflowCatalog(base_url="http://mfc.test", transport=RecordingTransport(result))

    with caplog.at_level(logging.WARNING):
        workflows = catalog.list_workflows()

    assert [w.id for w in workflows] == ["dev-start", "hueter-dev-session"]
    assert "event=fallback" in caplog.text


def test_fallback_list_is_a_fresh_copy() -> None:
    first = fallback_workflows()
    first[0].label = "changed"

    assert fallback_workflows()[0].label == "Dev-Start (MFC)"


def test_raising_transport_falls_back_to_builtin_list(caplog) -> None:
    transport = RecordingTransport(error=UnicodeDecodeError("utf-8", b"\xff", 0, 1, "bad"))
    catalog = WorkflowCatalog(base_url="http://mfc.test", transport=transport)

    with caplog.at_level(logging.WARNING):
        workflows = catalog.list_workflows()

    assert [w.id for w in workflows] == ["dev-start", "hueter-dev-session"]
    assert "transport_error=" in caplog.text
