"""
Calendar-day arithmetic for booking windows.

Everything here operates on calendar dates, never on instants, so time of
day and DST transitions cannot shift a result by a day.
"""

from pendulum import Date

from .models import PackageType, PrepTeardownWindow, Weekday, as_date
from .package_rules import allowed_start_weekdays, duration_nights


def compute_end_date(package_type: PackageType, start_date) -> Date:
    """Return the checkout date: start date plus the package's nights."""
    package = PackageType.parse(package_type)
    return as_date(start_date).add(days=duration_nights(package))


def compute_prep_teardown(start_date, package_type: PackageType) -> PrepTeardownWindow:
    """
    Return the vendor setup and breakdown nights for a booking.

    Only the 5-day extended package reserves nights: its first two nights for
    setup and its last two for breakdown. Every other package gets empty
    sequences.

    Raises:
        PreconditionViolation: If ``package_type`` is not a known package
    """
    package = PackageType.parse(package_type)
    if package is not PackageType.FIVE_DAY_EXTENDED:
        return PrepTeardownWindow()

    start = as_date(start_date)
    end = compute_end_date(package, start)
    return PrepTeardownWindow(
        prep_days=(start, start.add(days=1)),
        teardown_days=(end.subtract(days=2), end.subtract(days=1)),
    )


def calendar_day_gap(from_date, to_date) -> int:
    """Whole calendar days from ``from_date`` to ``to_date`` (negative if earlier)."""
    return as_date(from_date).diff(as_date(to_date), False).in_days()


def is_valid_start_day(package_type: PackageType, candidate_date) -> bool:
    package = PackageType.parse(package_type)
    return Weekday.of(candidate_date) in allowed_start_weekdays(package)


def has_minimum_reset_gap(previous_end, next_start, min_gap_days: int = 1) -> bool:
    """
    Check that a booking starting ``next_start`` leaves enough turnover time
    after a booking that ended ``previous_end``.
    """
    previous = as_date(previous_end)
    following = as_date(next_start)
    if following <= previous:
        return False
    return calendar_day_gap(previous, following) >= min_gap_days
