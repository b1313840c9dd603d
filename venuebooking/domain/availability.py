"""
Availability views over the single bookable unit.

Turns a snapshot of existing bookings into a per-day occupancy calendar and
lists the start dates that would pass validation for a package.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Sequence

from pendulum import Date

from .date_arithmetic import compute_prep_teardown
from .exceptions import PreconditionViolation
from .models import BookingWindow, ExistingBookingRef, PackageType, as_date
from .validator import SchedulingValidator


class DayStatus(str, Enum):
    AVAILABLE = "available"
    GUEST = "guest"
    PREP = "prep"
    TEARDOWN = "teardown"
    RESET = "reset"


@dataclass(frozen=True)
class CalendarDay:
    """One calendar date and what the venue is doing on it."""
    date: Date
    status: DayStatus
    booking_id: str | None = None


class AvailabilityCalculator:
    """
    Calculates occupancy and open start dates from existing bookings.

    The reset days after a booking are the turnover days on which no new
    booking may start (checkout day included).
    """

    def __init__(self, validator: SchedulingValidator):
        self.validator = validator

    def occupancy_calendar(
        self,
        range_start,
        range_end,
        existing: Sequence[ExistingBookingRef],
    ) -> List[CalendarDay]:
        """
        Build a day-by-day status list for ``range_start`` through ``range_end`` (inclusive).
        """
        first, last = self._bounds(range_start, range_end)
        gap = self.validator.settings.min_reset_gap_days

        occupied: Dict[Date, CalendarDay] = {}
        resetting: Dict[Date, CalendarDay] = {}

        for booking in existing:
            prep_days: tuple = ()
            teardown_days: tuple = ()
            if booking.package_type is not None:
                window = compute_prep_teardown(booking.start_date, booking.package_type)
                prep_days, teardown_days = window.prep_days, window.teardown_days

            current = booking.start_date
            while current < booking.end_date:
                if current in prep_days:
                    status = DayStatus.PREP
                elif current in teardown_days:
                    status = DayStatus.TEARDOWN
                else:
                    status = DayStatus.GUEST
                occupied[current] = CalendarDay(date=current, status=status, booking_id=booking.id)
                current = current.add(days=1)

            for offset in range(gap):
                reset_day = booking.end_date.add(days=offset)
                resetting.setdefault(
                    reset_day,
                    CalendarDay(date=reset_day, status=DayStatus.RESET, booking_id=booking.id),
                )

        days: List[CalendarDay] = []
        current = first
        while current <= last:
            # A night held by a booking wins over another booking's turnover day
            day = occupied.get(current) or resetting.get(current)
            days.append(day or CalendarDay(date=current, status=DayStatus.AVAILABLE))
            current = current.add(days=1)

        return days

    def open_start_dates(
        self,
        package_type: PackageType,
        range_start,
        range_end,
        existing: Sequence[ExistingBookingRef],
    ) -> List[Date]:
        """
        List every date in the range on which ``package_type`` could start.

        A date qualifies when it is an allowed start weekday, the whole stay
        is in season, and it collides with no existing booking. Guest counts
        and last-minute status do not affect availability.
        """
        package = PackageType.parse(package_type)
        first, last = self._bounds(range_start, range_end)

        open_dates: List[Date] = []
        current = first
        while current <= last:
            window = BookingWindow.for_package(package, current)
            if (
                self.validator.check_start_day(window) is None
                and self.validator.check_season(window) is None
                and not self.validator.find_conflicts(window, existing)
            ):
                open_dates.append(current)
            current = current.add(days=1)

        return open_dates

    @staticmethod
    def _bounds(range_start, range_end):
        first = as_date(range_start)
        last = as_date(range_end)
        if last < first:
            raise PreconditionViolation(f"Range end {last} is before range start {first}")
        return first, last
