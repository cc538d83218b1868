"""
Tests for the spreadsheet content repository
"""

import pytest

from slowtravel.content.repository import BOOKINGS_TAB, ContentRepository
from slowtravel.core.errors import ConfigurationError, SheetsError
from tests.conftest import FakeSheet, content_tabs


class TestReads:
    @pytest.mark.asyncio
    async def test_regions_sorted_with_default_order_last(self, repository):
        regions = await repository.list_regions()

        assert [r.slug for r in regions] == ["cities", "desert", "mountains"]
        assert regions[0].hero_image == "https://drive.google.com/thumbnail?id=abc123&sz=w1600"

    @pytest.mark.asyncio
    async def test_destinations_sorted_by_order(self, repository):
        destinations = await repository.list_destinations()

        assert [d.slug for d in destinations] == ["marrakech", "fes"]

    @pytest.mark.asyncio
    async def test_places_sorted_with_default_order_last(self, repository):
        places = await repository.list_places()

        assert [p.slug for p in places] == ["koutoubia", "majorelle", "bahia", "bou-inania"]

    @pytest.mark.asyncio
    async def test_destinations_published_and_in_region(self, repository):
        destinations = await repository.destinations_of_region("cities")

        assert [d.slug for d in destinations] == ["marrakech", "fes"]
        assert destinations[0].regions == ["Cities", "Mountains"]
        assert destinations[0].primary_region == "cities"

    @pytest.mark.asyncio
    async def test_unpublished_destination_is_hidden(self, repository):
        assert await repository.get_destination("imlil") is None
        assert await repository.destinations_of_region("mountains") == [
            await repository.get_destination("marrakech")
        ]

    @pytest.mark.asyncio
    async def test_places_of_destination_case_insensitive(self, repository):
        places = await repository.places_of_destination("marrakech")

        assert [p.slug for p in places] == ["koutoubia", "majorelle", "bahia"]

    @pytest.mark.asyncio
    async def test_featured_places(self, repository):
        featured = await repository.featured_places()

        assert [p.slug for p in featured] == ["koutoubia", "bahia"]

    @pytest.mark.asyncio
    async def test_place_fields_parsed(self, repository):
        place = await repository.get_place("bahia")

        assert place.sources == ["Source A", "Source B"]
        assert place.tags == ["palace", "garden"]
        assert place.body == "## History\nBuilt in 1866"

    @pytest.mark.asyncio
    async def test_place_images_filtered_and_ordered(self, repository):
        images = await repository.list_place_images("bahia")

        assert [i.caption for i in images] == ["Gate", "Courtyard"]
        assert images[0].image_url == "https://drive.google.com/thumbnail?id=img1&sz=w1600"

    @pytest.mark.asyncio
    async def test_day_trip_joined_with_route(self, repository):
        trip = await repository.get_day_trip("ourika")

        assert trip.title == "Ourika Valley"
        assert trip.price_eur == 100.0
        assert trip.departure_city == "Marrakech"
        assert trip.narrative == "A green valley\nin the Atlas"
        assert trip.from_city == "Marrakech"
        assert trip.to_city == "Setti Fatma"
        assert trip.includes == ["Driver", "Fuel"]

    @pytest.mark.asyncio
    async def test_day_trip_without_route(self, repository):
        trip = await repository.get_day_trip("essaouira")

        assert trip.narrative == ""
        assert trip.price_mad == 1500.0

    @pytest.mark.asyncio
    async def test_missing_day_trip(self, repository):
        assert await repository.get_day_trip("nowhere") is None

    @pytest.mark.asyncio
    async def test_addons_for_trip(self, repository):
        addons = await repository.addons_for_trip("ourika")

        assert [a.id for a in addons] == ["lunch"]

    @pytest.mark.asyncio
    async def test_setting_lookup(self, repository):
        assert await repository.get_setting("day_trips_hero_image") == \
            "https://drive.google.com/uc?export=view&id=hero42"
        assert await repository.get_setting("missing") is None

    @pytest.mark.asyncio
    async def test_journeys_for_destination_limited(self, repository):
        journeys = await repository.journeys_for_destination("Marrakech", limit=2)

        assert [j.slug for j in journeys] == ["imperial", "sahara"]
        assert await repository.journeys_for_destination("") == []


class TestFailureSemantics:
    @pytest.mark.asyncio
    async def test_failing_tab_reads_as_empty(self):
        repository = ContentRepository(FakeSheet(content_tabs(), failing={"Places"}))

        assert await repository.list_places() == []
        assert await repository.get_place("bahia") is None
        assert len(await repository.list_regions()) == 3

    @pytest.mark.asyncio
    async def test_missing_spreadsheet_id_reads_as_empty(self):
        sheet = FakeSheet()

        async def not_configured(range_):
            raise ConfigurationError("Spreadsheet id is not set")

        sheet.get_values = not_configured
        repository = ContentRepository(sheet)

        assert await repository.list_day_trips() == []
        assert await repository.list_place_images("bahia") == []

    @pytest.mark.asyncio
    async def test_writes_propagate(self):
        repository = ContentRepository(FakeSheet(failing={BOOKINGS_TAB}))

        with pytest.raises(SheetsError):
            await repository.append_record(BOOKINGS_TAB, ["DT-1"])


class TestWrites:
    @pytest.mark.asyncio
    async def test_append_record(self, sheet, repository):
        await repository.append_record("Quotes", ["Q001", "hello"])

        assert sheet.appended == [("Quotes!A:ZZ", [["Q001", "hello"]])]

    @pytest.mark.asyncio
    async def test_update_row(self, sheet, repository):
        await repository.update_row("Quotes", 5, ["Q004", "updated"])

        assert sheet.updated == [("Quotes!A5:ZZ5", [["Q004", "updated"]])]

    @pytest.mark.asyncio
    async def test_next_sequential_id(self):
        sheet = FakeSheet({"Clients": [["id", "name"], ["CL007", "a"], ["CL012", "b"], ["X999", "c"]]})
        repository = ContentRepository(sheet)

        assert await repository.next_sequential_id("CL", "Clients") == "CL013"

    @pytest.mark.asyncio
    async def test_next_sequential_id_on_empty_tab(self, repository):
        assert await repository.next_sequential_id("Q", "Quotes") == "Q001"
