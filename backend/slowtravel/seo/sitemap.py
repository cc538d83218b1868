import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Dict, List, Optional, Tuple
from xml.sax.saxutils import escape
from pydantic import BaseModel

from slowtravel.content.repository import ContentRepository

logger = logging.getLogger(__name__)


class SitemapEntry(BaseModel):
    url: str
    last_modified: str
    change_frequency: str
    priority: float


# (path, change frequency, priority)
STATIC_ROUTES: List[Tuple[str, str, float]] = [
    ("", "weekly", 1.0),
    ("/journeys", "weekly", 0.9),
    ("/day-trips", "weekly", 0.9),
    ("/places", "weekly", 0.9),
    ("/plan-your-trip", "monthly", 0.9),
    ("/about", "monthly", 0.7),
    ("/guides", "monthly", 0.7),
    ("/contact", "monthly", 0.8),
    ("/whats-included", "monthly", 0.7),
    ("/faq", "monthly", 0.6),
    ("/visa-info", "monthly", 0.5),
    ("/health-safety", "monthly", 0.5),
    ("/travel-insurance", "monthly", 0.5),
    ("/cancellation-policy", "yearly", 0.4),
    ("/privacy", "yearly", 0.3),
    ("/terms", "yearly", 0.3),
    ("/disclaimer", "yearly", 0.3),
    ("/intellectual-property", "yearly", 0.3),
]


class SitemapBuilder:
    """Static routes plus every published journey, day trip, region, destination and place."""

    def __init__(self, repository: ContentRepository, site_url: str):
        self.repository = repository
        self.site_url = site_url.rstrip("/")

    def _entry(self, path: str, now: str, frequency: str, priority: float) -> SitemapEntry:
        return SitemapEntry(
            url=f"{self.site_url}{path}",
            last_modified=now,
            change_frequency=frequency,
            priority=priority,
        )

    async def _journeys(self, now: str) -> List[SitemapEntry]:
        return [self._entry(f"/journeys/{j.slug}", now, "weekly", 0.8)
                for j in await self.repository.list_journeys()]

    async def _day_trips(self, now: str) -> List[SitemapEntry]:
        return [self._entry(f"/day-trips/{t.slug}", now, "weekly", 0.8)
                for t in await self.repository.list_day_trips()]

    async def _regions(self, now: str) -> List[SitemapEntry]:
        return [self._entry(f"/places/{r.slug}", now, "weekly", 0.8)
                for r in await self.repository.list_regions()]

    async def _destinations(self, now: str) -> List[SitemapEntry]:
        return [self._entry(f"/destination/{d.slug}", now, "weekly", 0.7)
                for d in await self.repository.list_destinations()]

    async def _places(self, now: str) -> List[SitemapEntry]:
        return [self._entry(f"/place/{p.slug}", now, "monthly", 0.6)
                for p in await self.repository.list_places()]

    async def build(self, now: Optional[datetime] = None) -> List[SitemapEntry]:
        stamp = (now or datetime.now(timezone.utc)).isoformat()
        entries = [self._entry(path, stamp, freq, prio) for path, freq, prio in STATIC_ROUTES]

        sources: Dict[str, Callable[[str], Awaitable[List[SitemapEntry]]]] = {
            "journeys": self._journeys,
            "day trips": self._day_trips,
            "regions": self._regions,
            "destinations": self._destinations,
            "places": self._places,
        }

        # One failing source must not blank the others
        results = await asyncio.gather(
            *(fetch(stamp) for fetch in sources.values()),
            return_exceptions=True,
        )

        for name, result in zip(sources, results):
            if isinstance(result, Exception):
                logger.error(f"Sitemap: Failed to fetch {name}: {result}")
                continue
            entries.extend(result)

        return entries


def render_sitemap(entries: List[SitemapEntry]) -> str:
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
    ]
    for entry in entries:
        lines.append(
            "<url>"
            f"<loc>{escape(entry.url)}</loc>"
            f"<lastmod>{escape(entry.last_modified)}</lastmod>"
            f"<changefreq>{entry.change_frequency}</changefreq>"
            f"<priority>{entry.priority:.1f}</priority>"
            "</url>"
        )
    lines.append("</urlset>")
    return "\n".join(lines)
