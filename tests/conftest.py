"""Pytest fixtures for the landing page handlers."""

import httpx
import pytest
from fastapi.testclient import TestClient

from api.feedback import get_feedback_writer
from api.order_submit import get_webhook_transport
from config import Settings, get_settings
from main import app


class FeedbackStoreStub:
    """Stands in for the Supabase insert; records rows or raises ``error``."""

    def __init__(self):
        self.rows = []
        self.error = None

    def __call__(self, record):
        if self.error is not None:
            raise self.error
        self.rows.append(record)
        return record


class WebhookStub:
    """Mock transport handler for the sheet webhook."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.text = "OK"

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.text)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def settings():
    return Settings(
        cloudinary_cloud_name="demo-cloud",
        cloudinary_api_key="123456789012345",
        cloudinary_api_secret="s3cr3t-api-value",
        supabase_url="https://example.supabase.co",
        supabase_service_role_key="service-role-key",
        order_webhook_url="https://script.example.com/macros/s/abc/exec",
        order_webhook_token="tok-123",
    )


@pytest.fixture
def feedback_store():
    return FeedbackStoreStub()


@pytest.fixture
def webhook():
    return WebhookStub()


@pytest.fixture
def client(settings, feedback_store, webhook):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_feedback_writer] = lambda: feedback_store
    app.dependency_overrides[get_webhook_transport] = lambda: webhook.transport
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
