"""
Tests for sitemap, robots.txt and structured data
"""

import pytest
from datetime import datetime, timezone

from slowtravel.content.repository import ContentRepository
from slowtravel.seo.robots import render_robots
from slowtravel.seo.sitemap import STATIC_ROUTES, SitemapBuilder, render_sitemap
from slowtravel.seo.structured_data import (
    breadcrumb_schema,
    place_article_schema,
    read_time_duration,
    travel_agency_schema,
)
from tests.conftest import FakeSheet, content_tabs

NOW = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestRobots:
    def test_disallowed_paths_and_sitemap(self):
        text = render_robots("https://slowmorocco.com/")

        assert text.splitlines() == [
            "User-Agent: *",
            "Allow: /",
            "Disallow: /admin/",
            "Disallow: /api/",
            "Disallow: /client/",
            "Disallow: /proposal/",
            "",
            "Sitemap: https://slowmorocco.com/sitemap.xml",
        ]


class TestSitemap:
    @pytest.mark.asyncio
    async def test_static_and_dynamic_entries(self):
        builder = SitemapBuilder(ContentRepository(FakeSheet(content_tabs())), "https://slowmorocco.com")

        entries = await builder.build(now=NOW)
        urls = [e.url for e in entries]

        assert urls[0] == "https://slowmorocco.com"
        assert urls[:len(STATIC_ROUTES)] == [f"https://slowmorocco.com{path}" for path, _, _ in STATIC_ROUTES]
        assert "https://slowmorocco.com/journeys/imperial" in urls
        assert "https://slowmorocco.com/day-trips/ourika" in urls
        assert "https://slowmorocco.com/places/cities" in urls
        assert "https://slowmorocco.com/destination/fes" in urls
        assert "https://slowmorocco.com/place/bahia" in urls
        assert "https://slowmorocco.com/destination/imlil" not in urls
        assert all(e.last_modified == NOW.isoformat() for e in entries)

    @pytest.mark.asyncio
    async def test_failing_source_only_drops_itself(self):
        repository = ContentRepository(FakeSheet(content_tabs()))

        async def broken():
            raise RuntimeError("journeys tab exploded")

        repository.list_journeys = broken
        entries = await SitemapBuilder(repository, "https://slowmorocco.com").build(now=NOW)
        urls = [e.url for e in entries]

        assert not any("/journeys/" in u for u in urls)
        assert "https://slowmorocco.com/day-trips/ourika" in urls
        assert "https://slowmorocco.com/place/bahia" in urls
        assert len(entries) > len(STATIC_ROUTES)

    def test_render_escapes_urls(self):
        builder = SitemapBuilder(None, "https://example.com")
        xml = render_sitemap([builder._entry("/a?b=1&c=2", "2026-05-01", "weekly", 0.8)])

        assert "<loc>https://example.com/a?b=1&amp;c=2</loc>" in xml
        assert "<priority>0.8</priority>" in xml
        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')


class TestStructuredData:
    def test_travel_agency(self):
        schema = travel_agency_schema("slow-morocco", "https://slowmorocco.com")

        assert schema["@type"] == "TravelAgency"
        assert schema["name"] == "Slow Morocco"
        assert len(schema["hasOfferCatalog"]["itemListElement"]) == 3

    def test_breadcrumb_positions(self):
        schema = breadcrumb_schema([("Home", "https://x"), ("Places", "https://x/places")])

        assert [i["position"] for i in schema["itemListElement"]] == [1, 2]

    def test_read_time(self):
        assert read_time_duration("14 min read") == "PT14M"
        assert read_time_duration("") is None

    @pytest.mark.asyncio
    async def test_place_article_drops_empty_fields(self):
        place = await ContentRepository(FakeSheet(content_tabs())).get_place("majorelle")

        schema = place_article_schema(place, "slow-morocco", "https://slowmorocco.com")

        assert schema["headline"] == "Jardin Majorelle"
        assert "author" not in schema
        assert "timeRequired" not in schema
        assert schema["mainEntityOfPage"]["@id"] == "https://slowmorocco.com/place/majorelle"
