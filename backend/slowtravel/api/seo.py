from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response

from slowtravel.core.config import settings
from slowtravel.content.repository import ContentRepository, get_repository
from slowtravel.seo.robots import render_robots
from slowtravel.seo.sitemap import SitemapBuilder, render_sitemap

router = APIRouter(tags=["seo"])


@router.get("/sitemap.xml")
async def sitemap(repository: ContentRepository = Depends(get_repository)):
    entries = await SitemapBuilder(repository, settings.site_url).build()
    return Response(content=render_sitemap(entries), media_type="application/xml")


@router.get("/robots.txt", response_class=PlainTextResponse)
async def robots():
    return render_robots(settings.site_url)
