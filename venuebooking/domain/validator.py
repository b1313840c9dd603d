"""
Scheduling validator - the single authority on whether a booking may be confirmed.

This is pure domain logic: it reads a snapshot of existing bookings and the
venue settings, never mutates them, and never performs I/O. Every failing
rule is collected so the caller sees all problems in one pass.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import pendulum
from pendulum import Date

from .date_arithmetic import (
    calendar_day_gap,
    compute_prep_teardown,
    is_valid_start_day,
)
from .models import (
    BookingRequest,
    BookingWindow,
    ExistingBookingRef,
    ValidationError,
    ValidationErrorCode,
    ValidationResult,
    VenueSettings,
    as_date,
)
from .package_rules import get_package_rule


def ranges_conflict(
    start_a: Date,
    end_a: Date,
    start_b: Date,
    end_b: Date,
    min_gap_days: int,
) -> bool:
    """
    Check whether two half-open stays [start, end) cannot both be held.

    They conflict unless one ends at least ``min_gap_days`` before the other
    starts. Overlapping stays always conflict since their gap is negative.
    """
    gap_after_b = calendar_day_gap(end_b, start_a)
    gap_after_a = calendar_day_gap(end_a, start_b)
    return gap_after_b < min_gap_days and gap_after_a < min_gap_days


@dataclass(frozen=True)
class ValidationContext:
    """Everything besides the request that a validation needs."""
    settings: VenueSettings = field(default_factory=VenueSettings)
    existing: Sequence[ExistingBookingRef] = ()
    today: Date | None = None


class SchedulingValidator:
    """
    Validates proposed bookings against the venue's scheduling rules.

    Checks, all of which run:
    1. The start date falls on an allowed weekday for the package
    2. Every date of the stay falls within the operating season
    3. Guest counts: reception cap is hard, camping/RV overages are warnings
    4. No overlap or short turnover with any existing booking
    5. Last-minute detection (informational)
    """

    def __init__(self, settings: VenueSettings):
        self.settings = settings

    def validate(
        self,
        request: BookingRequest,
        existing: Sequence[ExistingBookingRef] = (),
        today=None,
    ) -> ValidationResult:
        """
        Validate a proposed booking.

        Args:
            request: The proposed package, start date and guest counts
            existing: Snapshot of the venue's other bookings
            today: Reference date for last-minute detection; defaults to the
                current date in the venue's timezone

        Returns:
            ValidationResult with every failed rule in ``errors``

        Raises:
            PreconditionViolation: If the inputs are malformed
        """
        window = BookingWindow.for_package(request.package_type, request.start_date)
        reference_day = as_date(today) if today is not None else self.today()

        errors: List[ValidationError] = []
        warnings: List[str] = []

        start_day_error = self.check_start_day(window)
        if start_day_error:
            errors.append(start_day_error)

        season_error = self.check_season(window)
        if season_error:
            errors.append(season_error)

        guest_errors, guest_warnings, camping_overage, rv_overage = self.check_guests(request)
        errors.extend(guest_errors)
        warnings.extend(guest_warnings)

        errors.extend(self.find_conflicts(window, existing))

        days_until_start = calendar_day_gap(reference_day, window.start_date)

        return ValidationResult(
            window=window,
            prep_teardown=compute_prep_teardown(window.start_date, window.package_type),
            errors=tuple(errors),
            warnings=tuple(warnings),
            is_last_minute=days_until_start < self.settings.last_minute_threshold_days,
            days_until_start=days_until_start,
            camping_overage=camping_overage,
            rv_overage=rv_overage,
        )

    def today(self) -> Date:
        """Current calendar date in the venue's timezone."""
        return pendulum.today(self.settings.timezone).date()

    def check_start_day(self, window: BookingWindow) -> ValidationError | None:
        if is_valid_start_day(window.package_type, window.start_date):
            return None

        rule = get_package_rule(window.package_type)
        return ValidationError(
            code=ValidationErrorCode.INVALID_START_DAY,
            message=(
                f"{window.package_type.label} must start on "
                f"{rule.describe_start_days()}; "
                f"{window.start_date.to_date_string()} is a "
                f"{window.start_date.format('dddd')}."
            ),
        )

    def check_season(self, window: BookingWindow) -> ValidationError | None:
        """Every date from check-in through checkout must be in season."""
        nights = window.nights
        stay_dates = [window.start_date.add(days=i) for i in range(nights + 1)]
        if all(self.settings.in_season(d) for d in stay_dates):
            return None

        return ValidationError(
            code=ValidationErrorCode.OUT_OF_SEASON,
            message=(
                f"Booking must fall within the operating season "
                f"({self.settings.describe_season()})."
            ),
        )

    def check_guests(
        self,
        request: BookingRequest,
    ) -> Tuple[List[ValidationError], List[str], int, int]:
        """
        Check guest counts against the venue's caps.

        Returns:
            (errors, warnings, camping_overage, rv_overage)
        """
        errors: List[ValidationError] = []
        warnings: List[str] = []
        settings = self.settings

        if request.reception_guests > settings.max_reception_guests:
            errors.append(ValidationError(
                code=ValidationErrorCode.GUEST_CAPACITY_EXCEEDED,
                message=(
                    f"Reception guest count {request.reception_guests} exceeds "
                    f"the {settings.max_reception_guests} guest cap."
                ),
            ))

        # Overages are billable upsells, not rejections
        camping_overage = max(0, request.camping_guests - settings.included_camping_guests)
        rv_overage = max(0, request.rv_sites - settings.included_rv_sites)

        if camping_overage:
            warnings.append(
                f"Camping overage of {camping_overage} beyond included "
                f"{settings.included_camping_guests}."
            )
        if rv_overage:
            warnings.append(
                f"RV site overage of {rv_overage} beyond included "
                f"{settings.included_rv_sites}."
            )

        return errors, warnings, camping_overage, rv_overage

    def find_conflicts(
        self,
        window: BookingWindow,
        existing: Sequence[ExistingBookingRef],
    ) -> List[ValidationError]:
        """Return one DATE_CONFLICT error per existing booking the window collides with."""
        gap = self.settings.min_reset_gap_days
        conflicts: List[ValidationError] = []

        for booking in existing:
            if not ranges_conflict(
                window.start_date, window.end_date,
                booking.start_date, booking.end_date,
                gap,
            ):
                continue

            overlaps = (
                window.start_date < booking.end_date
                and window.end_date > booking.start_date
            )
            if overlaps:
                detail = "overlaps"
            else:
                detail = f"leaves less than {gap} day(s) of reset time around"

            conflicts.append(ValidationError(
                code=ValidationErrorCode.DATE_CONFLICT,
                message=(
                    f"{window.start_date.to_date_string()} - "
                    f"{window.end_date.to_date_string()} {detail} booking "
                    f"{booking.id} ({booking.start_date.to_date_string()} - "
                    f"{booking.end_date.to_date_string()})."
                ),
                booking_id=booking.id,
            ))

        return conflicts


def validate_booking(request: BookingRequest, context: ValidationContext) -> ValidationResult:
    """Validate ``request`` against the settings and bookings in ``context``."""
    validator = SchedulingValidator(settings=context.settings)
    return validator.validate(request, existing=context.existing, today=context.today)
