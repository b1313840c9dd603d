"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .booking_scheduler import BookingConfirmation, BookingSchedulerService, BookingStoreProtocol

__all__ = ["BookingConfirmation", "BookingSchedulerService", "BookingStoreProtocol"]
