import logging
import aiohttp
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from slowtravel.core.config import settings
from slowtravel.core.errors import ConfigurationError, SheetsError
from slowtravel.sheets.auth import ServiceAccountTokenManager, token_manager

logger = logging.getLogger(__name__)

Row = List[Any]


def rows_to_records(rows: List[Row]) -> List[Dict[str, str]]:
    """Map the header row onto every data row.

    Missing trailing cells become empty strings; a range with no data rows
    yields an empty list.
    """
    if not rows:
        return []

    headers = [str(h) for h in rows[0]]
    records = []
    for row in rows[1:]:
        record = {}
        for index, header in enumerate(headers):
            value = row[index] if index < len(row) else ""
            record[header] = "" if value is None else value
        records.append(record)
    return records


class SheetsClient:
    """Thin async wrapper over the Sheets v4 values endpoints."""

    def __init__(
        self,
        spreadsheet_id: Optional[str],
        tokens: ServiceAccountTokenManager = token_manager,
        api_base: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
    ):
        self.spreadsheet_id = spreadsheet_id
        self.tokens = tokens
        self.api_base = api_base or settings.sheets_api_base
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds or settings.sheets_timeout_seconds)

    def _values_url(self, range_: str, suffix: str = "") -> str:
        if not self.spreadsheet_id:
            raise ConfigurationError("Spreadsheet id is not set")
        return f"{self.api_base}/{self.spreadsheet_id}/values/{quote(range_, safe='!:')}{suffix}"

    async def _request(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            token = await self.tokens.get_access_token(session)
            headers = {"Authorization": f"Bearer {token}"}

            async with session.request(method, url, headers=headers, **kwargs) as response:
                if response.status == 401:
                    self.tokens.invalidate()
                if response.status >= 400:
                    body = await response.text()
                    raise SheetsError(
                        f"{method} {url} failed with {response.status}: {body[:200]}",
                        status=response.status,
                    )
                return await response.json()

    async def get_values(self, range_: str) -> List[Row]:
        """Read a range such as ``Regions!A:F``; returns raw rows."""
        data = await self._request("GET", self._values_url(range_))
        return data.get("values", [])

    async def get_records(self, tab: str, columns: str = "A1:ZZ") -> List[Dict[str, str]]:
        """Read a whole tab as header-keyed records."""
        return rows_to_records(await self.get_values(f"{tab}!{columns}"))

    async def append_values(self, range_: str, values: List[Row]) -> Dict[str, Any]:
        """Append rows after the last row of the range's table."""
        return await self._request(
            "POST",
            self._values_url(range_, ":append"),
            params={"valueInputOption": "RAW"},
            json={"values": values},
        )

    async def update_values(self, range_: str, values: List[Row]) -> Dict[str, Any]:
        """Overwrite the cells of a range in place."""
        return await self._request(
            "PUT",
            self._values_url(range_),
            params={"valueInputOption": "RAW"},
            json={"values": values},
        )


def get_content_sheet() -> SheetsClient:
    """Client for the site's content spreadsheet."""
    return SheetsClient(settings.google_sheet_id)


def get_nexus_sheet() -> SheetsClient:
    """Client for the shared Nexus spreadsheet (newsletter, shared tabs)."""
    return SheetsClient(settings.nexus_sheet_id)
