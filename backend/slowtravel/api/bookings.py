import logging
from typing import Any, Dict
from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from slowtravel.booking import BookingService
from slowtravel.content.repository import ContentRepository, get_repository
from slowtravel.models import DayTripBookingCreate, DayTripBookingResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/day-trip-bookings", tags=["bookings"])


def get_booking_service(repository: ContentRepository = Depends(get_repository)) -> BookingService:
    return BookingService(repository)


@router.post("")
async def create_day_trip_booking(
    payload: Dict[str, Any] = Body(...),
    service: BookingService = Depends(get_booking_service),
):
    """Record a booking whose payment has already been captured.

    A failure here means the guest has paid but no booking row exists; the
    client shows the PayPal transaction id so staff can reconcile by hand.
    """
    try:
        request = DayTripBookingCreate.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": f"Invalid booking: {fields}"},
        )

    try:
        booking = await service.record_booking(request)
    except Exception as e:
        logger.error(
            f"Day trip booking error: {e}",
            exc_info=True,
            extra={
                "trip_slug": request.trip_slug,
                "paypal_transaction_id": request.paypal_transaction_id,
            },
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": str(e)},
        )

    return DayTripBookingResponse(booking_id=booking.booking_id).model_dump(by_alias=True)
