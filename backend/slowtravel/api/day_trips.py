import asyncio
import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from slowtravel.content.normalize import convert_drive_url
from slowtravel.content.repository import ContentRepository, get_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/day-trips", tags=["day-trips"])


@router.get("")
async def list_day_trips(repository: ContentRepository = Depends(get_repository)):
    """Published day trips and add-ons plus the listing hero image.

    Failures degrade to an empty payload with HTTP 200 so the listing page
    can still render.
    """
    try:
        trips, addons, hero = await asyncio.gather(
            repository.list_day_trips(),
            repository.list_addons(),
            repository.get_setting("day_trips_hero_image"),
        )
    except Exception as e:
        logger.error(f"Day trips fetch error: {e}", exc_info=True)
        return {"success": False, "heroImage": "", "dayTrips": [], "addons": [], "error": str(e)}

    return {
        "success": True,
        "heroImage": convert_drive_url(hero or ""),
        "dayTrips": [t.to_json() for t in trips],
        "addons": [a.to_json() for a in addons],
    }


@router.get("/{slug}")
async def get_day_trip(slug: str, repository: ContentRepository = Depends(get_repository)):
    """One day trip with its route narrative and the add-ons that apply to it."""
    try:
        trip = await repository.get_day_trip(slug)
        if trip is None:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"success": False, "error": "Day trip not found"},
            )

        addons = await repository.addons_for_trip(slug)
    except Exception as e:
        logger.error(f"Day trip detail fetch error: {e}", exc_info=True, extra={"slug": slug})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": str(e)},
        )

    return {
        "success": True,
        "dayTrip": trip.to_json(),
        "addons": [a.model_dump(by_alias=True, exclude={"applies_to"}) for a in addons],
    }
