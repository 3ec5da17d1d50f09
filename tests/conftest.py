import os

# Must be set before the app modules read their settings
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("ENVIRONMENT", "test")

from typing import List, Optional  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from main import app  # noqa: E402
from routers.dependencies import get_designer_service  # noqa: E402
from services.ai_designer_service import AIDesignerService  # noqa: E402
from services.completion_client import ChatMessage, CompletionClientError  # noqa: E402


class FakeCompletionClient:
    """Completion client returning canned text (or raising) and recording calls"""

    name = "fake"

    def __init__(self, response: str = "", error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: List[dict] = []

    async def complete(self, messages: List[ChatMessage], max_tokens: int, temperature: float) -> str:
        self.calls.append({"messages": messages, "max_tokens": max_tokens, "temperature": temperature})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_client():
    return FakeCompletionClient()


@pytest.fixture
def failing_client():
    return FakeCompletionClient(error=CompletionClientError("upstream unavailable"))


@pytest.fixture
def service(fake_client):
    return AIDesignerService(fake_client)


@pytest.fixture
def api_client(fake_client):
    app.dependency_overrides[get_designer_service] = lambda: AIDesignerService(fake_client)
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
