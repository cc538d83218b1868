from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional

from slowtravel.core.brands import brand_name
from slowtravel.core.config import settings
from slowtravel.content.normalize import convert_drive_url
from slowtravel.content.repository import ContentRepository, get_repository
from slowtravel.seo.structured_data import (
    breadcrumb_schema,
    destination_metadata,
    place_article_schema,
    place_metadata,
    region_metadata,
    travel_agency_schema,
)

router = APIRouter(prefix="/api", tags=["content"])


def _site_url() -> str:
    return settings.site_url.rstrip("/")


@router.get("/site")
async def get_site(repository: ContentRepository = Depends(get_repository)):
    """Brand name, home hero image and site-wide structured data."""
    hero = await repository.get_setting("home_hero_image")
    return {
        "success": True,
        "siteId": settings.site_id,
        "brandName": brand_name(),
        "heroImage": convert_drive_url(hero or ""),
        "siteUrl": _site_url(),
        "schema": travel_agency_schema(settings.site_id, _site_url()),
    }


@router.get("/regions")
async def list_regions(repository: ContentRepository = Depends(get_repository)):
    regions = await repository.list_regions()
    return {"success": True, "regions": [r.to_json() for r in regions]}


@router.get("/regions/{slug}")
async def get_region(slug: str, repository: ContentRepository = Depends(get_repository)):
    """A region with its destinations."""
    region = await repository.get_region(slug)
    if not region:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Region not found")

    destinations = await repository.destinations_of_region(slug)
    site_url = _site_url()

    return {
        "success": True,
        "region": region.to_json(),
        "destinations": [d.to_json() for d in destinations],
        "metadata": region_metadata(region, settings.site_id, site_url),
        "schema": [
            breadcrumb_schema([
                ("Home", site_url),
                ("Places", f"{site_url}/places"),
                (region.title, f"{site_url}/places/{region.slug}"),
            ]),
        ],
    }


@router.get("/destinations/{slug}")
async def get_destination(slug: str, repository: ContentRepository = Depends(get_repository)):
    """A destination with its places, sorted by order."""
    destination = await repository.get_destination(slug)
    if not destination:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Destination not found")

    places = await repository.places_of_destination(slug)
    site_url = _site_url()

    crumbs = [("Home", site_url), ("Places", f"{site_url}/places")]
    primary = destination.primary_region
    if primary:
        crumbs.append((primary.capitalize(), f"{site_url}/places/{primary}"))
    crumbs.append((destination.title, f"{site_url}/destination/{destination.slug}"))

    return {
        "success": True,
        "destination": destination.to_json(),
        "primaryRegion": primary,
        "places": [p.to_json() for p in places],
        "metadata": destination_metadata(destination, settings.site_id, site_url),
        "schema": [breadcrumb_schema(crumbs)],
    }


@router.get("/places")
async def list_places(
    featured: bool = Query(False, description="Only featured places"),
    repository: ContentRepository = Depends(get_repository),
):
    if featured:
        places = await repository.featured_places()
    else:
        places = await repository.list_places()
    return {"success": True, "places": [p.to_json() for p in places]}


@router.get("/places/{slug}")
async def get_place(slug: str, repository: ContentRepository = Depends(get_repository)):
    """A place with its gallery, citations and article schema."""
    place = await repository.get_place(slug)
    if not place:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Place not found")

    images = await repository.list_place_images(slug)
    site_url = _site_url()

    return {
        "success": True,
        "place": place.to_json(),
        "images": [i.to_json() for i in images],
        "metadata": place_metadata(place, settings.site_id, site_url),
        "schema": [
            place_article_schema(place, settings.site_id, site_url),
            breadcrumb_schema([
                ("Home", site_url),
                ("Places", f"{site_url}/places"),
                (place.title, f"{site_url}/place/{place.slug}"),
            ]),
        ],
    }


@router.get("/journeys")
async def list_journeys(
    destination: Optional[str] = Query(None, description="Only journeys visiting this destination"),
    limit: int = Query(2, ge=1, le=20),
    repository: ContentRepository = Depends(get_repository),
):
    if destination:
        journeys = await repository.journeys_for_destination(destination, limit=limit)
    else:
        journeys = await repository.list_journeys()
    return {"success": True, "journeys": [j.to_json() for j in journeys]}
