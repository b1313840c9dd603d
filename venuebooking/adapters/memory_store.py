"""
In-memory booking store.

Stands in for the persistence layer in tests and in the CLI. It re-checks
the single-inventory rule under a lock at write time, which is the guarantee
the validator alone cannot give: two requests may both pass validation
against the same stale snapshot.
"""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from pathlib import Path
from typing import Iterable, List

from ..domain.exceptions import BookingConflictError, PreconditionViolation
from ..domain.models import BookingRequest, BookingWindow, ExistingBookingRef, VenueSettings
from ..domain.validator import ranges_conflict

logger = logging.getLogger(__name__)


class InMemoryBookingStore:
    """
    Async booking store backed by a list.

    ``read_delay`` simulates the latency of a real round trip so tests can
    interleave concurrent requests between the read and the write.
    """

    def __init__(
        self,
        settings: VenueSettings | None = None,
        bookings: Iterable[ExistingBookingRef] = (),
        read_delay: float = 0.0,
    ):
        self._settings = settings or VenueSettings()
        self._bookings: List[ExistingBookingRef] = list(bookings)
        self._read_delay = read_delay
        self._lock = asyncio.Lock()

    @classmethod
    def from_json(
        cls,
        bookings_file: Path,
        settings: VenueSettings | None = None,
    ) -> "InMemoryBookingStore":
        """
        Load bookings from a JSON array of objects with ``id``, ``start_date``,
        ``end_date`` and optional ``package_type``.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file isn't a valid bookings list
        """
        if not bookings_file.exists():
            raise FileNotFoundError(f"Bookings file not found: {bookings_file}")

        try:
            with open(bookings_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {bookings_file}: {exc}") from exc

        if not isinstance(data, list):
            raise ValueError("Bookings file must contain a list at the root level.")

        bookings: List[ExistingBookingRef] = []
        for index, entry in enumerate(data):
            try:
                bookings.append(ExistingBookingRef(
                    id=str(entry["id"]),
                    start_date=entry["start_date"],
                    end_date=entry["end_date"],
                    package_type=entry.get("package_type"),
                ))
            except (KeyError, TypeError, AttributeError) as exc:
                raise ValueError(f"Booking #{index} in {bookings_file} is malformed: {exc}") from exc

        logger.debug("Loaded %d bookings from %s", len(bookings), bookings_file)
        return cls(settings=settings, bookings=bookings)

    async def get_venue_settings(self) -> VenueSettings:
        return self._settings

    async def list_bookings(self) -> List[ExistingBookingRef]:
        """Return a snapshot of all bookings."""
        snapshot = list(self._bookings)
        await asyncio.sleep(self._read_delay)
        return snapshot

    async def insert_booking(
        self,
        window: BookingWindow,
        request: BookingRequest,
        is_last_minute: bool,
    ) -> str:
        """
        Persist a booking, re-enforcing the no-overlap and reset-gap rule atomically.

        Raises:
            BookingConflictError: If the window collides with a stored booking
        """
        if window.package_type is not request.package_type or window.start_date != request.start_date:
            raise PreconditionViolation("Booking window does not match the request")

        async with self._lock:
            gap = self._settings.min_reset_gap_days
            for booking in self._bookings:
                if ranges_conflict(
                    window.start_date, window.end_date,
                    booking.start_date, booking.end_date,
                    gap,
                ):
                    logger.warning(
                        "Rejected write for %s: collides with booking %s",
                        window, booking.id,
                    )
                    raise BookingConflictError(booking.id)

            booking_id = uuid.uuid4().hex
            self._bookings.append(ExistingBookingRef(
                id=booking_id,
                start_date=window.start_date,
                end_date=window.end_date,
                package_type=window.package_type,
            ))

        logger.info(
            "Stored booking %s (%s, last minute: %s)",
            booking_id, window, is_last_minute,
        )
        return booking_id
