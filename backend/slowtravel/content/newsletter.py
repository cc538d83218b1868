import logging
import secrets
import string
from datetime import datetime, timezone
from typing import Optional

from slowtravel.core.brands import brand_name
from slowtravel.models import NewsletterResult, NewsletterSubscription
from slowtravel.sheets import SheetsClient, get_nexus_sheet
from .repository import FETCH_ERRORS

logger = logging.getLogger(__name__)

SUBSCRIBERS_TAB = "Newsletter_Subscribers"
TOKEN_ALPHABET = string.ascii_letters + string.digits
TOKEN_LENGTH = 32


def generate_unsubscribe_token() -> str:
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class NewsletterService:
    """Per-brand newsletter subscriptions kept in the Nexus spreadsheet.

    Status changes locate the subscriber's row by scanning the tab and then
    write that row by index, so two processes changing the same subscriber at
    once can overwrite each other.
    """

    def __init__(self, sheet: SheetsClient):
        self.sheet = sheet

    async def _read_rows(self):
        rows = await self.sheet.get_values(f"{SUBSCRIBERS_TAB}!A1:F")
        headers = rows[0] if rows else NewsletterSubscription.COLUMNS
        return headers, rows

    @staticmethod
    def _cell(row, headers, column: str) -> str:
        try:
            index = list(headers).index(column)
        except ValueError:
            return ""
        return str(row[index]) if index < len(row) else ""

    async def subscribe(self, email: str, brand: Optional[str] = None) -> NewsletterResult:
        if not self.sheet.spreadsheet_id:
            logger.error("[Newsletter] NEXUS_SHEET_ID not configured")
            return NewsletterResult(success=False, message="Configuration error")

        brand = brand or brand_name()
        email = email.strip()
        logger.info("[Newsletter] Subscribing", extra={"brand": brand})

        try:
            headers, rows = await self._read_rows()

            for position, row in enumerate(rows[1:], start=2):
                if (self._cell(row, headers, "email").lower() == email.lower()
                        and self._cell(row, headers, "brand") == brand):
                    if self._cell(row, headers, "status") == "active":
                        return NewsletterResult(success=True, message="You're already subscribed.")

                    await self.sheet.update_values(f"{SUBSCRIBERS_TAB}!D{position}", [["active"]])
                    logger.info("[Newsletter] Reactivated subscription", extra={"row": position})
                    return NewsletterResult(success=True, message="Welcome back.", is_resubscribe=True)

            subscription = NewsletterSubscription(
                email=email,
                brand=brand,
                created_at=_now(),
                unsubscribe_token=generate_unsubscribe_token(),
            )
            await self.sheet.append_values(f"{SUBSCRIBERS_TAB}!A:F", [subscription.to_row()])
            logger.info("[Newsletter] Added new subscription", extra={"brand": brand})
            return NewsletterResult(success=True, message="You're in.")

        except FETCH_ERRORS as e:
            logger.error(f"[Newsletter] Error subscribing: {e}", exc_info=True)
            return NewsletterResult(success=False, message="Something went wrong. Please try again.")

    async def unsubscribe(self, token: str) -> NewsletterResult:
        if not self.sheet.spreadsheet_id:
            return NewsletterResult(success=False, message="Configuration error")

        try:
            headers, rows = await self._read_rows()

            for position, row in enumerate(rows[1:], start=2):
                if token and self._cell(row, headers, "unsubscribe_token") == token:
                    if self._cell(row, headers, "status") == "unsubscribed":
                        return NewsletterResult(success=True, message="You've already been removed.")

                    await self.sheet.update_values(
                        f"{SUBSCRIBERS_TAB}!D{position}:F{position}",
                        [["unsubscribed", token, _now()]],
                    )
                    return NewsletterResult(success=True, message="You've been removed.")

            return NewsletterResult(success=False, message="Invalid or expired link.")

        except FETCH_ERRORS as e:
            logger.error(f"[Newsletter] Error unsubscribing: {e}", exc_info=True)
            return NewsletterResult(success=False, message="Something went wrong. Please try again.")


def get_newsletter_service() -> NewsletterService:
    """FastAPI dependency for newsletter operations."""
    return NewsletterService(get_nexus_sheet())
