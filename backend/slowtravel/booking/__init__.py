from .service import BookingService

__all__ = ["BookingService"]
