"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability import AvailabilityCalculator, CalendarDay, DayStatus
from .date_arithmetic import (
    calendar_day_gap,
    compute_end_date,
    compute_prep_teardown,
    has_minimum_reset_gap,
    is_valid_start_day,
)
from .models import (
    BookingRequest,
    BookingWindow,
    ExistingBookingRef,
    MonthDay,
    PackageRule,
    PackageType,
    PrepTeardownWindow,
    ValidationError,
    ValidationErrorCode,
    ValidationResult,
    VenueSettings,
    Weekday,
)
from .package_rules import allowed_start_weekdays, duration_nights, get_package_rule
from .validator import SchedulingValidator, ValidationContext, validate_booking

__all__ = [
    "AvailabilityCalculator",
    "BookingRequest",
    "BookingWindow",
    "CalendarDay",
    "DayStatus",
    "ExistingBookingRef",
    "MonthDay",
    "PackageRule",
    "PackageType",
    "PrepTeardownWindow",
    "SchedulingValidator",
    "ValidationContext",
    "ValidationError",
    "ValidationErrorCode",
    "ValidationResult",
    "VenueSettings",
    "Weekday",
    "allowed_start_weekdays",
    "calendar_day_gap",
    "compute_end_date",
    "compute_prep_teardown",
    "duration_nights",
    "get_package_rule",
    "has_minimum_reset_gap",
    "is_valid_start_day",
    "validate_booking",
]
