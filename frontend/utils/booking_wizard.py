"""Day trip booking wizard.

Steps run strictly in order: date and guests, add-ons, contact details,
payment, confirmed. Closing the booking panel calls ``reset()``, which clears
every field and returns to the first step.

The wizard has no Streamlit dependency; pages keep one instance per trip in
session state and render whatever step it is on.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import IntEnum
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

MIN_NOTICE = timedelta(hours=48)
MIN_GUESTS = 1
MAX_GUESTS = 3  # price is per car


class Step(IntEnum):
    DATE_AND_GUESTS = 1
    ADDONS = 2
    CONTACT_DETAILS = 3
    PAYMENT = 4
    CONFIRMED = 5


STEP_TITLES = {
    Step.DATE_AND_GUESTS: "Date & guests",
    Step.ADDONS: "Add-ons",
    Step.CONTACT_DETAILS: "Your details",
    Step.PAYMENT: "Payment",
    Step.CONFIRMED: "Confirmed",
}


class PaymentError(Exception):
    """The payment provider refused or failed an order operation."""


class SubmissionError(Exception):
    """The booking request never got an answer from the API."""


@dataclass(frozen=True)
class PaymentOrder:
    order_id: str
    approval_url: Optional[str] = None


class PaymentProvider(Protocol):
    def create_order(self, amount: str, description: str) -> PaymentOrder:
        ...

    def capture_order(self, order_id: str) -> str:
        """Capture an approved order and return its transaction id."""
        ...


class BookingSubmitter(Protocol):
    def submit_booking(self, snapshot: Dict[str, Any]) -> Dict[str, Any]:
        """Post a booking; returns ``{"success": bool, "bookingId"|"error": ...}``."""
        ...


@dataclass(frozen=True)
class TripOption:
    slug: str
    title: str
    base_price_mad: float
    base_price_eur: float

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "TripOption":
        return cls(
            slug=data.get("slug", ""),
            title=data.get("title", ""),
            base_price_mad=float(data.get("priceMAD") or 0),
            base_price_eur=float(data.get("priceEUR") or 0),
        )


@dataclass(frozen=True)
class AddonOption:
    id: str
    name: str
    price_mad: float
    price_eur: float
    description: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "AddonOption":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            price_mad=float(data.get("priceMAD") or 0),
            price_eur=float(data.get("priceEUR") or 0),
            description=data.get("description", ""),
        )


@dataclass(frozen=True)
class Quote:
    """Per-car base price plus per-person add-ons, in both currencies."""

    base_mad: float
    base_eur: float
    addons_mad: float
    addons_eur: float
    lines: Tuple[Tuple[str, int, float], ...] = ()  # (add-on name, guests, EUR subtotal)

    @property
    def total_mad(self) -> float:
        return self.base_mad + self.addons_mad

    @property
    def total_eur(self) -> float:
        return self.base_eur + self.addons_eur

    @property
    def payment_amount(self) -> str:
        return f"{self.total_eur:.2f}"


def compute_quote(trip: TripOption, addons: List[AddonOption], selected: List[str], guests: int) -> Quote:
    by_id = {a.id: a for a in addons}
    chosen = [by_id[addon_id] for addon_id in selected if addon_id in by_id]

    return Quote(
        base_mad=trip.base_price_mad,
        base_eur=trip.base_price_eur,
        addons_mad=sum(a.price_mad * guests for a in chosen),
        addons_eur=sum(a.price_eur * guests for a in chosen),
        lines=tuple((a.name, guests, a.price_eur * guests) for a in chosen),
    )


@dataclass
class BookingWizard:
    trip: TripOption
    addons: List[AddonOption]
    payments: PaymentProvider
    submitter: BookingSubmitter
    clock: Callable[[], datetime] = datetime.now

    step: Step = Step.DATE_AND_GUESTS
    trip_date: Optional[date] = None
    guests: int = 2
    selected_addons: List[str] = field(default_factory=list)
    guest_name: str = ""
    guest_email: str = ""
    guest_phone: str = ""
    pickup_location: str = ""
    notes: str = ""

    order: Optional[PaymentOrder] = None
    transaction_id: Optional[str] = None
    booking_id: Optional[str] = None
    alert: Optional[str] = None
    _mounted_key: Optional[Tuple[str, str, str, int]] = None
    _captured_key: Optional[Tuple[str, str, str, int]] = None

    # Lifecycle

    def reset(self):
        """Discard everything; used when the booking panel is closed or reopened."""
        self.unmount_payment()
        self.step = Step.DATE_AND_GUESTS
        self.trip_date = None
        self.guests = 2
        self.selected_addons = []
        self.guest_name = ""
        self.guest_email = ""
        self.guest_phone = ""
        self.pickup_location = ""
        self.notes = ""
        self.transaction_id = None
        self._captured_key = None
        self.booking_id = None
        self.alert = None

    # Pricing

    @property
    def quote(self) -> Quote:
        return compute_quote(self.trip, self.addons, self.selected_addons, self.guests)

    @property
    def earliest_date(self) -> date:
        return (self.clock() + MIN_NOTICE).date()

    def selected_addon_names(self) -> List[str]:
        names = {a.id: a.name for a in self.addons}
        return [names[i] for i in self.selected_addons if i in names]

    def toggle_addon(self, addon_id: str):
        if addon_id in self.selected_addons:
            self.selected_addons.remove(addon_id)
        elif any(a.id == addon_id for a in self.addons):
            self.selected_addons.append(addon_id)

    # Navigation

    def validate(self, step: Optional[Step] = None) -> List[str]:
        """Reasons the given step (default: current) cannot be left forwards."""
        step = self.step if step is None else step
        errors = []

        if step == Step.DATE_AND_GUESTS:
            if self.trip_date is None:
                errors.append("Please choose a date.")
            elif self.trip_date < self.earliest_date:
                errors.append("Minimum 48 hours notice required.")
            if not MIN_GUESTS <= self.guests <= MAX_GUESTS:
                errors.append(f"Guests must be between {MIN_GUESTS} and {MAX_GUESTS}.")

        elif step == Step.CONTACT_DETAILS:
            if not self.guest_name.strip():
                errors.append("Please enter your full name.")
            if not self.guest_email.strip():
                errors.append("Please enter your email.")
            if not self.pickup_location.strip():
                errors.append("Please enter a pickup location.")

        elif step == Step.PAYMENT:
            errors.append("Payment must be completed to confirm the booking.")

        elif step == Step.CONFIRMED:
            errors.append("The booking is already confirmed.")

        return errors

    def next(self) -> List[str]:
        """Advance one step; returns the blocking errors, empty when it moved."""
        errors = self.validate()
        if errors:
            return errors

        self.alert = None
        self.step = Step(self.step + 1)
        if self.step == Step.PAYMENT:
            self.mount_payment()
        return []

    def back(self):
        """Go back one step. Locked once the payment has been captured."""
        if self.step in (Step.DATE_AND_GUESTS, Step.CONFIRMED) or self.transaction_id:
            return
        if self.step == Step.PAYMENT:
            self.unmount_payment()
        self.alert = None
        self.step = Step(self.step - 1)

    # Payment

    @property
    def payment_key(self) -> Tuple[str, str, str, int]:
        return (
            self.quote.payment_amount,
            self.trip.slug,
            self.trip_date.isoformat() if self.trip_date else "",
            self.guests,
        )

    @property
    def payment_description(self) -> str:
        trip_date = self.trip_date.isoformat() if self.trip_date else ""
        return f"{self.trip.title} - {trip_date} - {self.guests} guest(s)"

    def mount_payment(self) -> Optional[PaymentOrder]:
        """Create the payment order once per (total, trip, date, guests)."""
        if self.step != Step.PAYMENT:
            return None

        key = self.payment_key
        if self.order is not None and self._mounted_key == key:
            return self.order

        self.unmount_payment()
        try:
            self.order = self.payments.create_order(self.quote.payment_amount, self.payment_description)
        except PaymentError:
            self.alert = "Payment failed. Please try again."
            return None

        self._mounted_key = key
        return self.order

    def unmount_payment(self):
        self.order = None
        self._mounted_key = None

    def complete_payment(self) -> bool:
        """Capture the approved order, then record the booking.

        A transaction already captured in an earlier attempt is reused, so a
        failed write can be retried without charging again.
        """
        if self.step != Step.PAYMENT:
            return False

        if self.transaction_id is None:
            if self.mount_payment() is None:
                return False
            try:
                self.transaction_id = self.payments.capture_order(self.order.order_id)
                self._captured_key = self._mounted_key
            except PaymentError:
                self.alert = "Payment failed. Please try again."
                return False

        return self.submit_booking()

    def booking_snapshot(self) -> Dict[str, Any]:
        quote = self.quote
        return {
            "tripSlug": self.trip.slug,
            "tripTitle": self.trip.title,
            "tripDate": self.trip_date.isoformat() if self.trip_date else "",
            "guests": self.guests,
            "basePriceMAD": quote.base_mad,
            "addons": ", ".join(self.selected_addon_names()),
            "addonsPriceMAD": quote.addons_mad,
            "totalMAD": quote.total_mad,
            "totalEUR": quote.total_eur,
            "guestName": self.guest_name.strip(),
            "guestEmail": self.guest_email.strip(),
            "guestPhone": self.guest_phone.strip(),
            "pickupLocation": self.pickup_location.strip(),
            "notes": self.notes.strip(),
            "paypalTransactionId": self.transaction_id or "",
        }

    def submit_booking(self) -> bool:
        """Send the snapshot; every call creates a new booking id server-side."""
        if self.step != Step.PAYMENT or not self.transaction_id:
            return False
        if self.payment_key != self._captured_key:
            self.alert = (
                "Booking details changed after payment. Please contact us with your PayPal transaction ID: "
                f"{self.transaction_id}"
            )
            return False

        try:
            result = self.submitter.submit_booking(self.booking_snapshot())
        except SubmissionError:
            self.alert = "Something went wrong. Please contact us."
            return False

        if not result.get("success"):
            self.alert = (
                "Booking save failed. Please contact us with your PayPal transaction ID: "
                f"{self.transaction_id}"
            )
            return False

        self.booking_id = result.get("bookingId")
        self.alert = None
        self.unmount_payment()
        self.step = Step.CONFIRMED
        return True
