"""
Domain models for package rules, booking windows and validation results.

All dates are timezone-naive calendar dates (``pendulum.Date``). Nothing in
this module performs I/O and every value type is immutable.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum, IntEnum
from typing import FrozenSet, Tuple

import pendulum
from pendulum import Date

from .exceptions import PreconditionViolation


def as_date(value) -> Date:
    """
    Normalize a date-like value to a ``pendulum.Date``.

    Accepts ``date``/``datetime`` objects (the time part is dropped) and ISO
    8601 strings such as ``2026-06-11``.

    Raises:
        PreconditionViolation: If the value cannot be read as a calendar date
    """
    if isinstance(value, str):
        try:
            parsed = pendulum.parse(value, exact=True)
        except ValueError as exc:
            raise PreconditionViolation(f"Invalid date string: {value!r}") from exc
        # Covers both Date and DateTime results
        if isinstance(parsed, date):
            return pendulum.date(parsed.year, parsed.month, parsed.day)
        raise PreconditionViolation(f"Not a calendar date: {value!r}")

    # datetime is a subclass of date, so this also covers DateTime values
    if isinstance(value, date):
        return pendulum.date(value.year, value.month, value.day)

    raise PreconditionViolation(f"Expected a date, got {type(value).__name__}")


class PackageType(str, Enum):
    """The closed set of rentable packages."""
    THREE_DAY_WEEKEND = "3_day_weekend"
    FIVE_DAY_EXTENDED = "5_day_extended"
    TEN_DAY_EXPERIENCE = "10_day_experience"

    @classmethod
    def parse(cls, value) -> "PackageType":
        """
        Read a package type from its wire value.

        Raises:
            PreconditionViolation: If the value is not a known package type
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as exc:
            known = ", ".join(member.value for member in cls)
            raise PreconditionViolation(
                f"Unknown package type: {value!r} (expected one of {known})"
            ) from exc

    @property
    def label(self) -> str:
        return _PACKAGE_LABELS[self]


_PACKAGE_LABELS = {
    PackageType.THREE_DAY_WEEKEND: "3-Day Weekend",
    PackageType.FIVE_DAY_EXTENDED: "5-Day Extended",
    PackageType.TEN_DAY_EXPERIENCE: "10-Day Experience",
}


class Weekday(IntEnum):
    """Day of week, Sunday-based (0=Sunday, 6=Saturday)."""
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def of(cls, value) -> "Weekday":
        """Return the weekday of a calendar date."""
        return cls(as_date(value).isoweekday() % 7)

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class PackageRule:
    """
    Duration and start-day constraint for one package type.

    Invariant: duration_nights >= 1 and at least one start weekday.
    """
    duration_nights: int
    allowed_start_weekdays: FrozenSet[Weekday]

    def __post_init__(self):
        if self.duration_nights < 1:
            raise PreconditionViolation(
                f"duration_nights must be at least 1, got {self.duration_nights}"
            )
        if not self.allowed_start_weekdays:
            raise PreconditionViolation("A package rule needs at least one start weekday")

    def describe_start_days(self) -> str:
        """Human readable list of the allowed start days, e.g. 'Wednesday or Thursday'."""
        names = [day.display_name for day in sorted(self.allowed_start_weekdays)]
        if len(names) == 1:
            return names[0]
        return ", ".join(names[:-1]) + " or " + names[-1]


@dataclass(frozen=True, order=True)
class MonthDay:
    """A year-agnostic month/day pair used for season bounds."""
    month: int
    day: int

    def __post_init__(self):
        try:
            # 2000 is a leap year, so 02-29 is accepted
            date(2000, self.month, self.day)
        except ValueError as exc:
            raise PreconditionViolation(
                f"Invalid month/day: {self.month:02d}-{self.day:02d}"
            ) from exc

    @classmethod
    def parse(cls, value: str) -> "MonthDay":
        """Parse a ``MM-DD`` string."""
        try:
            month, day = (int(part) for part in value.strip().split("-"))
        except ValueError as exc:
            raise PreconditionViolation(f"Expected MM-DD, got {value!r}") from exc
        return cls(month=month, day=day)

    @classmethod
    def of(cls, value) -> "MonthDay":
        d = as_date(value)
        return cls(month=d.month, day=d.day)

    def __str__(self) -> str:
        return f"{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True)
class VenueSettings:
    """
    Venue configuration consumed by the scheduling validator.

    The season may wrap across the new year (e.g. 11-01 to 02-28).
    """
    season_start: MonthDay = MonthDay(6, 1)
    season_end: MonthDay = MonthDay(9, 30)
    max_reception_guests: int = 150
    included_camping_guests: int = 60
    included_rv_sites: int = 15
    min_reset_gap_days: int = 1
    last_minute_threshold_days: int = 14
    timezone: str = "America/Toronto"

    def __post_init__(self):
        if self.min_reset_gap_days < 1:
            raise PreconditionViolation(
                f"min_reset_gap_days must be at least 1, got {self.min_reset_gap_days}"
            )
        if self.last_minute_threshold_days < 0:
            raise PreconditionViolation("last_minute_threshold_days cannot be negative")
        for name in ("max_reception_guests", "included_camping_guests", "included_rv_sites"):
            if getattr(self, name) < 0:
                raise PreconditionViolation(f"{name} cannot be negative")

    def in_season(self, value) -> bool:
        """Check whether a calendar date falls inside the operating season."""
        md = MonthDay.of(value)
        if self.season_start <= self.season_end:
            return self.season_start <= md <= self.season_end
        # Season wraps across the year boundary
        return md >= self.season_start or md <= self.season_end

    def describe_season(self) -> str:
        start = pendulum.date(2000, self.season_start.month, self.season_start.day)
        end = pendulum.date(2000, self.season_end.month, self.season_end.day)
        return f"{start.format('MMMM D')} to {end.format('MMMM D')}"


@dataclass(frozen=True)
class BookingWindow:
    """
    A booking's occupied date range, [start_date, end_date).

    Invariant: end_date == start_date + duration_nights(package_type).
    Use ``BookingWindow.for_package`` to build one.
    """
    start_date: Date
    end_date: Date
    package_type: PackageType

    def __post_init__(self):
        from .package_rules import duration_nights

        object.__setattr__(self, "start_date", as_date(self.start_date))
        object.__setattr__(self, "end_date", as_date(self.end_date))
        object.__setattr__(self, "package_type", PackageType.parse(self.package_type))

        expected_end = self.start_date.add(days=duration_nights(self.package_type))
        if self.end_date != expected_end:
            raise PreconditionViolation(
                f"Inconsistent booking window: {self.package_type.value} starting "
                f"{self.start_date} must end {expected_end}, got {self.end_date}"
            )

    @classmethod
    def for_package(cls, package_type, start_date) -> "BookingWindow":
        from .package_rules import duration_nights

        package = PackageType.parse(package_type)
        start = as_date(start_date)
        return cls(
            start_date=start,
            end_date=start.add(days=duration_nights(package)),
            package_type=package,
        )

    @property
    def nights(self) -> int:
        return self.start_date.diff(self.end_date).in_days()

    def occupied_dates(self) -> Tuple[Date, ...]:
        """Every night of the stay (the end date is checkout, not occupied)."""
        return tuple(self.start_date.add(days=i) for i in range(self.nights))

    def __str__(self) -> str:
        return f"{self.package_type.label}: {self.start_date} - {self.end_date}"


@dataclass(frozen=True)
class PrepTeardownWindow:
    """Nights reserved for vendor setup and breakdown within a booking."""
    prep_days: Tuple[Date, ...] = ()
    teardown_days: Tuple[Date, ...] = ()


@dataclass(frozen=True)
class ExistingBookingRef:
    """
    Read-only projection of a persisted booking.

    ``package_type`` is optional and only used to render prep/teardown
    nights on the occupancy calendar.
    """
    id: str
    start_date: Date
    end_date: Date
    package_type: PackageType | None = None

    def __post_init__(self):
        object.__setattr__(self, "start_date", as_date(self.start_date))
        object.__setattr__(self, "end_date", as_date(self.end_date))
        if self.package_type is not None:
            object.__setattr__(self, "package_type", PackageType.parse(self.package_type))
        if self.end_date <= self.start_date:
            raise PreconditionViolation(
                f"Existing booking {self.id} ends {self.end_date} on or before "
                f"its start {self.start_date}"
            )


@dataclass(frozen=True)
class BookingRequest:
    """A proposed booking as submitted by the booking workflow."""
    package_type: PackageType
    start_date: Date
    reception_guests: int = 0
    camping_guests: int = 0
    rv_sites: int = 0

    def __post_init__(self):
        object.__setattr__(self, "package_type", PackageType.parse(self.package_type))
        object.__setattr__(self, "start_date", as_date(self.start_date))
        for name in ("reception_guests", "camping_guests", "rv_sites"):
            if getattr(self, name) < 0:
                raise PreconditionViolation(f"{name} cannot be negative")


class ValidationErrorCode(str, Enum):
    INVALID_START_DAY = "invalid_start_day"
    OUT_OF_SEASON = "out_of_season"
    GUEST_CAPACITY_EXCEEDED = "guest_capacity_exceeded"
    DATE_CONFLICT = "date_conflict"


@dataclass(frozen=True)
class ValidationError:
    """One failed business rule. ``booking_id`` is set for date conflicts."""
    code: ValidationErrorCode
    message: str
    booking_id: str | None = None


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating a proposed booking.

    An empty ``errors`` tuple means the booking may be persisted; ``warnings``
    are advisory and may be present either way.
    """
    window: BookingWindow
    prep_teardown: PrepTeardownWindow
    errors: Tuple[ValidationError, ...] = ()
    warnings: Tuple[str, ...] = ()
    is_last_minute: bool = False
    days_until_start: int = 0
    camping_overage: int = 0
    rv_overage: int = 0

    @property
    def is_bookable(self) -> bool:
        return not self.errors

    def error_codes(self) -> Tuple[ValidationErrorCode, ...]:
        return tuple(error.code for error in self.errors)

    def conflicting_booking_ids(self) -> Tuple[str, ...]:
        return tuple(
            error.booking_id for error in self.errors
            if error.code is ValidationErrorCode.DATE_CONFLICT
        )
