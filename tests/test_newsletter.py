"""
Tests for newsletter subscribe / unsubscribe transitions
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock

from slowtravel.content.newsletter import (
    SUBSCRIBERS_TAB,
    NewsletterService,
    generate_unsubscribe_token,
    get_newsletter_service,
)
from slowtravel.core.errors import SheetsError
from slowtravel.main import app
from slowtravel.models import NewsletterSubscription
from tests.conftest import FakeSheet

HEADERS = NewsletterSubscription.COLUMNS


def subscribers(*rows):
    return FakeSheet({SUBSCRIBERS_TAB: [HEADERS, *rows]}, spreadsheet_id="nexus")


class TestSubscribe:
    @pytest.mark.asyncio
    async def test_new_subscriber_appended(self):
        sheet = subscribers()

        result = await NewsletterService(sheet).subscribe("new@example.com", "Slow Morocco")

        assert result.success
        assert result.message == "You're in."
        range_, rows = sheet.appended[0]
        assert range_ == f"{SUBSCRIBERS_TAB}!A:F"
        email, brand, created_at, status, token, unsubscribed_at = rows[0]
        assert (email, brand, status, unsubscribed_at) == ("new@example.com", "Slow Morocco", "active", "")
        assert len(token) == 32
        assert created_at.endswith("Z")

    @pytest.mark.asyncio
    async def test_brand_defaults_to_site_brand(self):
        sheet = subscribers()

        await NewsletterService(sheet).subscribe("new@example.com")

        assert sheet.appended[0][1][0][1] == "Slow Morocco"

    @pytest.mark.asyncio
    async def test_already_active(self):
        sheet = subscribers(["a@example.com", "Slow Morocco", "2026-01-01", "active", "tok", ""])

        result = await NewsletterService(sheet).subscribe("A@Example.com", "Slow Morocco")

        assert result.success
        assert result.message == "You're already subscribed."
        assert sheet.appended == []
        assert sheet.updated == []

    @pytest.mark.asyncio
    async def test_same_email_other_brand_is_new(self):
        sheet = subscribers(["a@example.com", "Slow Namibia", "2026-01-01", "active", "tok", ""])

        result = await NewsletterService(sheet).subscribe("a@example.com", "Slow Morocco")

        assert result.message == "You're in."
        assert len(sheet.appended) == 1

    @pytest.mark.asyncio
    async def test_resubscribe_reactivates_row(self):
        sheet = subscribers(
            ["x@example.com", "Slow Morocco", "2026-01-01", "active", "t1", ""],
            ["a@example.com", "Slow Morocco", "2026-01-01", "unsubscribed", "t2", "2026-02-01"],
        )

        result = await NewsletterService(sheet).subscribe("a@example.com", "Slow Morocco")

        assert result.message == "Welcome back."
        assert result.is_resubscribe is True
        assert sheet.updated == [(f"{SUBSCRIBERS_TAB}!D3", [["active"]])]

    @pytest.mark.asyncio
    async def test_missing_nexus_sheet(self):
        result = await NewsletterService(FakeSheet(spreadsheet_id=None)).subscribe("a@example.com")

        assert not result.success
        assert result.message == "Configuration error"

    @pytest.mark.asyncio
    async def test_sheet_error_is_reported(self):
        sheet = subscribers()
        sheet.get_values = AsyncMock(side_effect=SheetsError("boom", status=503))

        result = await NewsletterService(sheet).subscribe("a@example.com")

        assert not result.success
        assert result.message == "Something went wrong. Please try again."


class TestUnsubscribe:
    @pytest.mark.asyncio
    async def test_unknown_token(self):
        result = await NewsletterService(subscribers()).unsubscribe("nope")

        assert not result.success
        assert result.message == "Invalid or expired link."

    @pytest.mark.asyncio
    async def test_already_removed(self):
        sheet = subscribers(["a@example.com", "Slow Morocco", "2026-01-01", "unsubscribed", "tok", "2026-02-01"])

        result = await NewsletterService(sheet).unsubscribe("tok")

        assert result.success
        assert result.message == "You've already been removed."
        assert sheet.updated == []

    @pytest.mark.asyncio
    async def test_removes_subscriber(self):
        sheet = subscribers(["a@example.com", "Slow Morocco", "2026-01-01", "active", "tok", ""])

        result = await NewsletterService(sheet).unsubscribe("tok")

        assert result.success
        assert result.message == "You've been removed."
        range_, values = sheet.updated[0]
        assert range_ == f"{SUBSCRIBERS_TAB}!D2:F2"
        assert values[0][:2] == ["unsubscribed", "tok"]


def test_tokens_are_random():
    tokens = {generate_unsubscribe_token() for _ in range(20)}

    assert len(tokens) == 20
    assert all(len(t) == 32 and t.isalnum() for t in tokens)


class TestNewsletterRoutes:
    def test_subscribe_endpoint(self):
        sheet = subscribers()
        app.dependency_overrides[get_newsletter_service] = lambda: NewsletterService(sheet)
        try:
            client = TestClient(app)
            response = client.post("/api/newsletter/subscribe", json={"email": "new@example.com"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "You're in."}

    def test_subscribe_rejects_bad_email(self):
        client = TestClient(app)

        response = client.post("/api/newsletter/subscribe", json={"email": "not-an-email"})

        assert response.status_code == 422
