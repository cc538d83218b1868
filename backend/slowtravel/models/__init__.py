from .base import SheetRecord
from .content import (
    Region,
    Destination,
    Place,
    PlaceImage,
    DayTrip,
    DayTripDetail,
    Route,
    Addon,
    Journey,
    WebsiteSetting,
)
from .booking import (
    DayTripBookingCreate,
    DayTripBooking,
    DayTripBookingResponse,
    NewsletterSubscription,
    NewsletterResult,
)

__all__ = [
    "SheetRecord",
    "Region",
    "Destination",
    "Place",
    "PlaceImage",
    "DayTrip",
    "DayTripDetail",
    "Route",
    "Addon",
    "Journey",
    "WebsiteSetting",
    "DayTripBookingCreate",
    "DayTripBooking",
    "DayTripBookingResponse",
    "NewsletterSubscription",
    "NewsletterResult",
]
