"""Tests for the Resend email client. All sends are best-effort."""

import json
from uuid import uuid4

import httpx
import pytest

from app.core.config import settings
from app.services.notification_service import NotificationService


@pytest.fixture
def email_enabled(monkeypatch):
    monkeypatch.setattr(settings, "resend_api_key", "re_test_key")
    monkeypatch.setattr(settings, "admin_notification_emails", ["ops@example.com"])


def client_for(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestNotificationService:

    @pytest.mark.asyncio
    async def test_new_company_email_goes_to_admins(self, email_enabled):
        sent = []

        def handler(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            return httpx.Response(200, json={"id": "email_123"})

        service = NotificationService(client=client_for(handler))
        ok = await service.notify_new_company(
            company_id=uuid4(), company_name="Acme <Panels>", submitted_by="owner@example.com"
        )

        assert ok is True
        [request] = sent
        assert str(request.url) == settings.resend_api_url
        assert request.headers["Authorization"] == "Bearer re_test_key"
        body = json.loads(request.content)
        assert body["to"] == ["ops@example.com"]
        assert body["subject"] == "New Company Pending Approval: Acme <Panels>"
        assert "Acme &lt;Panels&gt;" in body["html"]

    @pytest.mark.asyncio
    async def test_approval_email_links_listing(self, email_enabled):
        sent = []

        def handler(request: httpx.Request) -> httpx.Response:
            sent.append(json.loads(request.content))
            return httpx.Response(200, json={"id": "email_456"})

        service = NotificationService(client=client_for(handler))
        ok = await service.notify_company_approved(
            company_id=uuid4(),
            company_name="Acme",
            company_slug="acme",
            recipients=["owner@example.com"],
        )

        assert ok is True
        assert sent[0]["to"] == ["owner@example.com"]
        assert "/companies/acme" in sent[0]["html"]

    @pytest.mark.asyncio
    async def test_provider_error_is_swallowed(self, email_enabled):
        service = NotificationService(client=client_for(lambda request: httpx.Response(503)))
        ok = await service.notify_new_company(company_id=uuid4(), company_name="Acme", submitted_by=None)
        assert ok is False

    @pytest.mark.asyncio
    async def test_transport_error_is_swallowed(self, email_enabled):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        service = NotificationService(client=client_for(handler))
        ok = await service.notify_new_company(company_id=uuid4(), company_name="Acme", submitted_by=None)
        assert ok is False

    @pytest.mark.asyncio
    async def test_disabled_without_api_key(self, monkeypatch):
        monkeypatch.setattr(settings, "resend_api_key", None)
        calls = []
        service = NotificationService(client=client_for(lambda request: calls.append(request)))

        ok = await service.notify_new_company(company_id=uuid4(), company_name="Acme", submitted_by=None)

        assert ok is False
        assert calls == []

    @pytest.mark.asyncio
    async def test_no_recipients_sends_nothing(self, email_enabled):
        calls = []
        service = NotificationService(client=client_for(lambda request: calls.append(request)))
        ok = await service.notify_company_approved(
            company_id=uuid4(), company_name="Acme", company_slug="acme", recipients=[]
        )
        assert ok is False
        assert calls == []
