"""Read and write access to the content spreadsheet.

Reads never raise: a missing credential, an API error or a timeout is logged
and the caller gets an empty list (or ``None`` for single lookups), so pages
can render a "coming soon" state instead of failing. Writes propagate.
"""

import asyncio
import logging
import re
import aiohttp
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

from slowtravel.core.errors import SlowTravelError
from slowtravel.models import (
    Addon,
    DayTrip,
    DayTripDetail,
    Destination,
    Journey,
    Place,
    PlaceImage,
    Region,
    Route,
    SheetRecord,
    WebsiteSetting,
)
from slowtravel.sheets import SheetsClient, get_content_sheet
from .normalize import sort_by_order

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=SheetRecord)

FETCH_ERRORS = (SlowTravelError, aiohttp.ClientError, asyncio.TimeoutError)

# Tab names
REGIONS_TAB = "Regions"
DESTINATIONS_TAB = "Destinations"
PLACES_TAB = "Places"
PLACE_IMAGES_TAB = "Place_Images"
DAY_TRIPS_TAB = "Day_Trips"
ADDONS_TAB = "Day_Trip_Addons"
CONTENT_LIBRARY_TAB = "Content_Library"
SETTINGS_TAB = "Website_Settings"
JOURNEYS_TAB = "Website_Journeys"
BOOKINGS_TAB = "Day_Trip_Bookings"


class ContentRepository:
    """Typed access to the spreadsheet tabs behind the site."""

    def __init__(self, sheet: SheetsClient):
        self.sheet = sheet

    async def get_sheet_data(self, tab: str) -> List[Dict[str, Any]]:
        """Header-keyed records of a tab, or [] if the fetch fails."""
        try:
            return await self.sheet.get_records(tab)
        except FETCH_ERRORS as e:
            logger.error(
                f'Error fetching sheet "{tab}": {e}',
                extra={"tab": tab, "exception_type": type(e).__name__},
            )
            return []

    async def _load(self, tab: str, model: Type[R]) -> List[R]:
        return [model.from_row(row) for row in await self.get_sheet_data(tab)]

    # Regions

    async def list_regions(self) -> List[Region]:
        return sort_by_order(await self._load(REGIONS_TAB, Region))

    async def get_region(self, slug: str) -> Optional[Region]:
        return next((r for r in await self.list_regions() if r.slug == slug), None)

    # Destinations

    async def list_destinations(self) -> List[Destination]:
        """Published destinations, by sort order."""
        return sort_by_order([d for d in await self._load(DESTINATIONS_TAB, Destination) if d.published])

    async def get_destination(self, slug: str) -> Optional[Destination]:
        return next((d for d in await self.list_destinations() if d.slug == slug), None)

    async def destinations_of_region(self, region_slug: str) -> List[Destination]:
        destinations = await self.list_destinations()
        return [d for d in destinations if d.in_region(region_slug)]

    # Places

    async def list_places(self) -> List[Place]:
        """Published places, by sort order."""
        return sort_by_order([p for p in await self._load(PLACES_TAB, Place) if p.published])

    async def get_place(self, slug: str) -> Optional[Place]:
        return next((p for p in await self.list_places() if p.slug == slug), None)

    async def places_of_destination(self, destination_slug: str) -> List[Place]:
        wanted = destination_slug.strip().lower()
        places = await self.list_places()
        return [p for p in places if p.destination.strip().lower() == wanted]

    async def featured_places(self) -> List[Place]:
        return [p for p in await self.list_places() if p.featured]

    async def list_place_images(self, place_slug: str) -> List[PlaceImage]:
        try:
            rows = await self.sheet.get_values(f"{PLACE_IMAGES_TAB}!A:D")
        except FETCH_ERRORS as e:
            logger.error(f"Error fetching place images: {e}", extra={"place": place_slug})
            return []

        images = [PlaceImage.from_cells(row) for row in rows[1:]]
        images = [i for i in images if i.place_slug == place_slug and i.image_url]
        return sorted(images, key=lambda i: i.image_order)

    # Day trips

    async def list_day_trips(self) -> List[DayTrip]:
        return [t for t in await self._load(DAY_TRIPS_TAB, DayTrip) if t.published]

    async def get_day_trip(self, slug: str) -> Optional[DayTripDetail]:
        """A day trip joined with its Content_Library route, published or not."""
        trips = await self._load(DAY_TRIPS_TAB, DayTrip)
        trip = next((t for t in trips if t.slug == slug), None)
        if trip is None:
            return None

        routes = await self._load(CONTENT_LIBRARY_TAB, Route)
        route = next((r for r in routes if trip.route_id and r.route_id == trip.route_id), None)
        return DayTripDetail.combine(trip, route)

    async def list_addons(self) -> List[Addon]:
        return [a for a in await self._load(ADDONS_TAB, Addon) if a.published]

    async def addons_for_trip(self, slug: str) -> List[Addon]:
        return [a for a in await self.list_addons() if a.applies_to_trip(slug)]

    async def get_setting(self, key: str) -> Optional[str]:
        settings = await self._load(SETTINGS_TAB, WebsiteSetting)
        return next((s.value for s in settings if s.key == key), None)

    # Journeys

    async def list_journeys(self) -> List[Journey]:
        return [j for j in await self._load(JOURNEYS_TAB, Journey) if j.published]

    async def journeys_for_destination(self, destination: str, limit: int = 2) -> List[Journey]:
        if not destination:
            return []
        return [j for j in await self.list_journeys() if j.visits(destination)][:limit]

    # Writes

    async def append_record(self, tab: str, row: Sequence[Any]) -> None:
        """Append one row; the Sheets API serialises concurrent appends."""
        await self.sheet.append_values(f"{tab}!A:ZZ", [list(row)])

    async def update_row(self, tab: str, row_index: int, values: Sequence[Any]) -> None:
        """Overwrite the 1-based sheet row ``row_index``. No concurrency check."""
        await self.sheet.update_values(f"{tab}!A{row_index}:ZZ{row_index}", [list(values)])

    async def next_sequential_id(self, prefix: str, tab: str) -> str:
        """Next ``prefix`` + 3-digit number after the highest existing id.

        Two callers racing on the same tab can get the same id.
        """
        pattern = re.compile(rf"^{re.escape(prefix)}(\d+)")
        numbers = []
        for row in await self.get_sheet_data(tab):
            match = pattern.match(str(row.get("id", "")))
            if match:
                numbers.append(int(match.group(1)))

        return f"{prefix}{max(numbers, default=0) + 1:03d}"


def get_repository() -> ContentRepository:
    """FastAPI dependency for the content repository."""
    return ContentRepository(get_content_sheet())
