import pytest
from typing import Dict, List

from slowtravel.core.errors import SheetsError
from slowtravel.content.repository import ContentRepository
from slowtravel.sheets.client import rows_to_records


class FakeSheet:
    """In-memory stand-in for SheetsClient, keyed by tab name."""

    def __init__(self, tabs: Dict[str, List[list]] = None, failing=(), spreadsheet_id="test-sheet"):
        self.tabs = {name: [list(row) for row in rows] for name, rows in (tabs or {}).items()}
        self.failing = set(failing)
        self.spreadsheet_id = spreadsheet_id
        self.appended = []
        self.updated = []

    @staticmethod
    def _tab(range_: str) -> str:
        return range_.split("!")[0]

    def _check(self, tab: str):
        if tab in self.failing:
            raise SheetsError(f"{tab} unavailable", status=500)

    async def get_values(self, range_):
        tab = self._tab(range_)
        self._check(tab)
        return [list(row) for row in self.tabs.get(tab, [])]

    async def get_records(self, tab, columns="A1:ZZ"):
        return rows_to_records(await self.get_values(f"{tab}!{columns}"))

    async def append_values(self, range_, values):
        tab = self._tab(range_)
        self._check(tab)
        self.appended.append((range_, values))
        self.tabs.setdefault(tab, []).extend(values)
        return {"updates": {"updatedRows": len(values)}}

    async def update_values(self, range_, values):
        self._check(self._tab(range_))
        self.updated.append((range_, values))
        return {"updatedRows": len(values)}


REGIONS = [
    ["slug", "title", "subtitle", "heroImage", "description", "order"],
    ["desert", "Desert", "Dunes and oases", "", "", "3"],
    ["cities", "Cities", "Medinas", "https://drive.google.com/file/d/abc123/view", "", "1"],
    ["mountains", "Mountains", "High Atlas", "", "", ""],
]

DESTINATIONS = [
    ["slug", "title", "region", "published", "order", "excerpt"],
    ["fes", "Fes", "cities", "TRUE", "2", "The old capital"],
    ["marrakech", "Marrakech", "Cities, Mountains", "yes", "1", "The red city"],
    ["imlil", "Imlil", "mountains", "no", "1", ""],
]

PLACES = [
    ["slug", "title", "destination", "published", "featured", "order", "sources", "tags", "body"],
    ["bahia", "Palais Bahia", "marrakech", "TRUE", "TRUE", "2", "Source A;;Source B", "palace, garden", "## History<br>Built in 1866"],
    ["majorelle", "Jardin Majorelle", "Marrakech", "1", "", "1", "", "", ""],
    ["koutoubia", "Koutoubia", "marrakech", "TRUE", "yes", "0", "", "", ""],
    ["draft", "Draft Place", "marrakech", "false", "TRUE", "1", "", "", ""],
    ["bou-inania", "Bou Inania", "fes", "TRUE", "", "", "", "", ""],
]

PLACE_IMAGES = [
    ["place_slug", "image_order", "image_url", "caption"],
    ["bahia", "2", "https://example.com/2.jpg", "Courtyard"],
    ["bahia", "1", "https://drive.google.com/open?id=img1", "Gate"],
    ["bahia", "3", "", "Missing url"],
    ["majorelle", "1", "https://example.com/m.jpg", "Blue"],
]

DAY_TRIPS = [
    ["Slug", "Route_ID", "Title", "Short_Description", "Duration_Hours", "Final_Price_MAD",
     "Final_Price_EUR", "Departure_City", "Hero_Image_URL", "Includes", "Published"],
    ["ourika", "R-001", "Ourika Valley", "Waterfalls", "8", "1000", "100", "", "", "Driver|Fuel", "TRUE"],
    ["essaouira", "R-002", "Essaouira", "Coast", "10", "1500", "150", "Marrakech", "", "", "TRUE"],
    ["hidden", "R-003", "Hidden", "", "6", "800", "80", "", "", "", "no"],
]

ADDONS = [
    ["Addon_ID", "Addon_Name", "Description", "Final_Price_MAD_PP", "Final_Price_EUR_PP", "Applies_To", "Published"],
    ["lunch", "Berber lunch", "Home cooked", "200", "20", "ourika|essaouira", "TRUE"],
    ["camel", "Camel ride", "", "300", "30", "essaouira", "TRUE"],
    ["old", "Retired", "", "100", "10", "ourika", "FALSE"],
]

CONTENT_LIBRARY = [
    ["Route_ID", "Route_Narrative", "From_City", "To_City", "Via_Cities", "Difficulty_Level"],
    ["R-001", "A green valley<br>in the Atlas", "", "Setti Fatma", "Tnine Ourika", "Easy"],
]

SETTINGS = [
    ["Key", "Value"],
    ["day_trips_hero_image", "https://drive.google.com/uc?export=view&id=hero42"],
]

JOURNEYS = [
    ["Slug", "Title", "Duration", "Destinations", "Published"],
    ["imperial", "Imperial Cities", "8 days", "Fes, Marrakech", "TRUE"],
    ["sahara", "Sahara", "5 days", "Marrakech, Merzouga", "TRUE"],
    ["grand", "Grand Tour", "14 days", "marrakech", "TRUE"],
    ["draft", "Draft", "3 days", "Marrakech", ""],
]


def content_tabs():
    return {
        "Regions": REGIONS,
        "Destinations": DESTINATIONS,
        "Places": PLACES,
        "Place_Images": PLACE_IMAGES,
        "Day_Trips": DAY_TRIPS,
        "Day_Trip_Addons": ADDONS,
        "Content_Library": CONTENT_LIBRARY,
        "Website_Settings": SETTINGS,
        "Website_Journeys": JOURNEYS,
    }


@pytest.fixture
def sheet():
    return FakeSheet(content_tabs())


@pytest.fixture
def repository(sheet):
    return ContentRepository(sheet)
