import logging
from datetime import datetime
from typing import Optional

from slowtravel.content.repository import BOOKINGS_TAB, ContentRepository
from slowtravel.models import DayTripBooking, DayTripBookingCreate

logger = logging.getLogger(__name__)


class BookingService:
    """Records paid day trip bookings in the bookings tab.

    Every call generates a fresh ``DT-<epoch millis>`` id; nothing is keyed on
    the PayPal transaction id, so a retried submission adds a second row.
    """

    def __init__(self, repository: ContentRepository):
        self.repository = repository

    async def record_booking(self, request: DayTripBookingCreate, now: Optional[datetime] = None) -> DayTripBooking:
        booking = DayTripBooking.from_request(request, now=now)
        await self.repository.append_record(BOOKINGS_TAB, booking.to_row())

        logger.info(
            "Day trip booking recorded",
            extra={
                "booking_id": booking.booking_id,
                "trip_slug": booking.trip_slug,
                "trip_date": booking.trip_date,
                "guests": booking.guests,
            },
        )
        return booking
