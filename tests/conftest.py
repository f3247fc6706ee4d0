"""Test configuration and fixtures."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from workflow_state_machine.core import WorkflowDefinitionDraft, WorkflowService
from workflow_state_machine.server.app import create_app


@pytest.fixture
def doc_approval_payload() -> dict[str, object]:
    """The document approval workflow, as a caller would submit it."""
    return {
        "id": "doc-approval",
        "states": [
            {"id": "draft", "isInitial": True},
            {"id": "review"},
            {"id": "approved", "isFinal": True},
            {"id": "rejected", "isFinal": True},
        ],
        "actions": [
            {"id": "submit", "fromStates": ["draft"], "toState": "review"},
            {"id": "approve", "fromStates": ["review"], "toState": "approved"},
            {"id": "reject", "fromStates": ["review"], "toState": "rejected"},
        ],
    }


@pytest.fixture
def doc_approval(doc_approval_payload: dict[str, object]) -> WorkflowDefinitionDraft:
    """Provide the document approval definition draft."""
    return WorkflowDefinitionDraft.model_validate(doc_approval_payload)


@pytest.fixture
def service() -> WorkflowService:
    """Provide a fresh service with empty stores."""
    return WorkflowService()


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> TestClient:
    """Provide a test client over a fresh app."""
    monkeypatch.delenv("WORKFLOW_CORS_ORIGINS", raising=False)
    return TestClient(create_app())
