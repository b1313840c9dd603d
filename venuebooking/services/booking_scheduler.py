"""
Application service for checking and creating bookings.

The service fetches venue settings and a snapshot of existing bookings via a
store adapter and delegates every scheduling decision to the domain-level
``SchedulingValidator``. The store stays the source of truth for mutual
exclusion: it must re-check the single-inventory rule when it writes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Protocol, Tuple

from pendulum import Date

from ..domain.availability import AvailabilityCalculator, CalendarDay
from ..domain.exceptions import BookingRejected
from ..domain.models import (
    BookingRequest,
    BookingWindow,
    ExistingBookingRef,
    PackageType,
    PrepTeardownWindow,
    ValidationResult,
    VenueSettings,
)
from ..domain.validator import SchedulingValidator

logger = logging.getLogger(__name__)


class BookingStoreProtocol(Protocol):
    """Protocol describing the storage behaviour needed by the service."""

    async def get_venue_settings(self) -> VenueSettings:
        """Return the venue's current settings."""

    async def list_bookings(self) -> List[ExistingBookingRef]:
        """Return every existing booking for the venue."""

    async def insert_booking(
        self,
        window: BookingWindow,
        request: BookingRequest,
        is_last_minute: bool,
    ) -> str:
        """Persist a booking and return its id; raise BookingConflictError on collision."""


@dataclass(frozen=True)
class BookingConfirmation:
    """A booking that passed validation and was stored."""
    booking_id: str
    window: BookingWindow
    prep_teardown: PrepTeardownWindow
    warnings: Tuple[str, ...]
    is_last_minute: bool


class BookingSchedulerService:
    """
    Orchestrates snapshot retrieval, validation and persistence.

    Dependency inversion toward a protocol makes it easy to plug in a real
    database-backed store or the in-memory one in tests.
    """

    def __init__(self, store: BookingStoreProtocol) -> None:
        self._store = store

    async def check_booking(
        self,
        request: BookingRequest,
        today: Date | None = None,
    ) -> ValidationResult:
        """Validate a proposed booking without storing anything."""
        validator, existing = await self._load_snapshot()
        result = validator.validate(request, existing=existing, today=today)

        logger.debug(
            "Checked %s starting %s: %d error(s), %d warning(s)",
            request.package_type.value,
            request.start_date,
            len(result.errors),
            len(result.warnings),
        )
        return result

    async def create_booking(
        self,
        request: BookingRequest,
        today: Date | None = None,
    ) -> BookingConfirmation:
        """
        Validate and store a booking.

        Raises:
            BookingRejected: If any business rule fails
            BookingConflictError: If the store finds a collision at write time
        """
        result = await self.check_booking(request, today=today)
        if not result.is_bookable:
            logger.info(
                "Rejected %s starting %s: %s",
                request.package_type.value,
                request.start_date,
                ", ".join(code.value for code in result.error_codes()),
            )
            raise BookingRejected(result)

        booking_id = await self._store.insert_booking(
            result.window,
            request,
            result.is_last_minute,
        )

        return BookingConfirmation(
            booking_id=booking_id,
            window=result.window,
            prep_teardown=result.prep_teardown,
            warnings=result.warnings,
            is_last_minute=result.is_last_minute,
        )

    async def find_open_start_dates(
        self,
        package_type: PackageType,
        range_start,
        range_end,
    ) -> List[Date]:
        """List the dates in a range on which ``package_type`` could start."""
        validator, existing = await self._load_snapshot()
        calculator = AvailabilityCalculator(validator=validator)
        return calculator.open_start_dates(package_type, range_start, range_end, existing)

    async def occupancy_calendar(self, range_start, range_end) -> List[CalendarDay]:
        """Day-by-day occupancy for a date range."""
        validator, existing = await self._load_snapshot()
        calculator = AvailabilityCalculator(validator=validator)
        return calculator.occupancy_calendar(range_start, range_end, existing)

    async def _load_snapshot(self) -> Tuple[SchedulingValidator, List[ExistingBookingRef]]:
        settings = await self._store.get_venue_settings()
        existing = await self._store.list_bookings()
        return SchedulingValidator(settings=settings), existing
