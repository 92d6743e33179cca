from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from fakes import FakeAdapter, RecordingTransport
from mfc_bridge.api.main import create_app
from mfc_bridge.config.settings import Settings
from mfc_bridge.downstream.forwarding import ForwardingClient
from mfc_bridge.downstream.workflows import WorkflowCatalog
from mfc_bridge.runs import InMemoryRunRegistry
from mfc_bridge.structuring import IncomingTask, TaskStructurer


@pytest.fixture
def incoming_task() -> IncomingTask:
    return IncomingTask.model_validate(
        {
            "id": "mfc-42",
            "state": "open",
            "createdAt": "2026-03-01T10:00:00Z",
            "updatedAt": "2026-03-01T10:05:00Z",
            "author": "ops",
            "rawText": "we need a health check on the flight board, nothing fancy",
        }
    )


@pytest.fixture
def test_settings() -> Settings:
    return Settings(downstream_base_url="http://mfc.test", openai_api_key="", port=4000)


@pytest.fixture
def forward_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def make_client(test_settings: Settings, forward_transport: RecordingTransport):
    """Build a TestClient with a fresh registry and fake remote collaborators."""

    def _make(
        *,
        adapter: FakeAdapter | None = None,
        catalog_transport: RecordingTransport | None = None,
    ) -> TestClient:
        app = create_app(
            settings_override=test_settings,
            registry=InMemoryRunRegistry(),
            structurer=TaskStructurer(adapter),
            forwarder=ForwardingClient(base_url="http://mfc.test", transport=forward_transport),
            catalog=WorkflowCatalog(
                base_url="http://mfc.test",
                transport=catalog_transport or RecordingTransport(),
            ),
        )
        return TestClient(app)

    return _make
