from datetime import datetime, timezone
from typing import Any, ClassVar, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DayTripBookingCreate(BaseModel):
    """Snapshot posted by the booking wizard after payment capture."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    trip_slug: str = Field(..., min_length=1)
    trip_title: str = ""
    trip_date: str = Field(..., min_length=1)
    guests: int = Field(..., ge=1)
    base_price_mad: float = Field(0.0, alias="basePriceMAD")
    addons: str = ""  # comma-separated add-on names
    addons_price_mad: float = Field(0.0, alias="addonsPriceMAD")
    total_mad: float = Field(0.0, alias="totalMAD")
    total_eur: float = Field(0.0, alias="totalEUR")
    guest_name: str = Field(..., min_length=1)
    guest_email: str = Field(..., min_length=1)
    guest_phone: str = ""
    pickup_location: str = Field(..., min_length=1)
    notes: str = ""
    paypal_transaction_id: str = Field(..., min_length=1)


class DayTripBooking(DayTripBookingCreate):
    """A booking as written to the Day_Trip_Bookings tab."""

    booking_id: str
    created_at: str
    status: str = "confirmed"

    @staticmethod
    def generate_id(now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        return f"DT-{int(now.timestamp() * 1000)}"

    @classmethod
    def from_request(cls, request: DayTripBookingCreate, now: Optional[datetime] = None) -> "DayTripBooking":
        now = now or datetime.now(timezone.utc)
        return cls(
            booking_id=cls.generate_id(now),
            created_at=now.isoformat().replace("+00:00", "Z"),
            **request.model_dump(),
        )

    def to_row(self) -> List[Any]:
        """Cells in the fixed column order of the bookings tab."""
        return [
            self.booking_id,
            self.created_at,
            self.trip_slug,
            self.trip_title,
            self.trip_date,
            self.guests,
            self.base_price_mad,
            self.addons,
            self.addons_price_mad,
            self.total_mad,
            self.total_eur,
            self.guest_name,
            self.guest_email,
            self.guest_phone,
            self.pickup_location,
            self.notes,
            self.paypal_transaction_id,
            self.status,
        ]


class DayTripBookingResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    booking_id: str
    message: str = "Booking confirmed"


class NewsletterSubscription(BaseModel):
    """One row of the Newsletter_Subscribers tab."""

    COLUMNS: ClassVar[List[str]] = ["email", "brand", "created_at", "status", "unsubscribe_token", "unsubscribed_at"]

    email: str
    brand: str
    created_at: str = ""
    status: str = "active"
    unsubscribe_token: str = ""
    unsubscribed_at: str = ""

    def to_row(self) -> List[Any]:
        return [self.email, self.brand, self.created_at, self.status, self.unsubscribe_token, self.unsubscribed_at]


class NewsletterResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    message: str
    is_resubscribe: Optional[bool] = None
