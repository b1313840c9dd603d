"""
Tests for the availability calculator.
"""

import pendulum
import pytest

from venuebooking.domain.availability import AvailabilityCalculator, DayStatus
from venuebooking.domain.exceptions import PreconditionViolation
from venuebooking.domain.models import ExistingBookingRef, PackageType, VenueSettings
from venuebooking.domain.validator import SchedulingValidator


def _calculator(**overrides) -> AvailabilityCalculator:
    return AvailabilityCalculator(validator=SchedulingValidator(settings=VenueSettings(**overrides)))


class TestOccupancyCalendar:
    """Tests for the day-by-day occupancy view."""

    def test_five_day_booking_shows_prep_and_teardown(self):
        existing = [
            ExistingBookingRef(
                id="bk-5",
                start_date="2026-06-11",
                end_date="2026-06-16",
                package_type=PackageType.FIVE_DAY_EXTENDED,
            )
        ]

        days = _calculator().occupancy_calendar("2026-06-10", "2026-06-17", existing)
        statuses = [day.status for day in days]

        assert statuses == [
            DayStatus.AVAILABLE,  # 06-10
            DayStatus.PREP,       # 06-11
            DayStatus.PREP,       # 06-12
            DayStatus.GUEST,      # 06-13
            DayStatus.TEARDOWN,   # 06-14
            DayStatus.TEARDOWN,   # 06-15
            DayStatus.RESET,      # 06-16 checkout / turnover
            DayStatus.AVAILABLE,  # 06-17
        ]
        assert days[3].booking_id == "bk-5"

    def test_unknown_package_renders_all_nights_as_guest(self):
        existing = [ExistingBookingRef(id="bk-1", start_date="2026-06-11", end_date="2026-06-16")]

        days = _calculator().occupancy_calendar("2026-06-11", "2026-06-15", existing)

        assert {day.status for day in days} == {DayStatus.GUEST}

    def test_reset_days_follow_configured_gap(self):
        existing = [ExistingBookingRef(id="bk-1", start_date="2026-06-12", end_date="2026-06-15")]

        days = _calculator(min_reset_gap_days=2).occupancy_calendar("2026-06-15", "2026-06-17", existing)

        assert [day.status for day in days] == [DayStatus.RESET, DayStatus.RESET, DayStatus.AVAILABLE]

    def test_reversed_range_raises(self):
        with pytest.raises(PreconditionViolation):
            _calculator().occupancy_calendar("2026-06-20", "2026-06-10", [])


class TestOpenStartDates:
    """Tests for listing legal start dates."""

    def test_fridays_in_june(self):
        open_dates = _calculator().open_start_dates(
            PackageType.THREE_DAY_WEEKEND, "2026-06-01", "2026-06-30", []
        )

        assert open_dates == [
            pendulum.date(2026, 6, 5),
            pendulum.date(2026, 6, 12),
            pendulum.date(2026, 6, 19),
            pendulum.date(2026, 6, 26),
        ]

    def test_existing_booking_removes_dates(self):
        existing = [ExistingBookingRef(id="bk-1", start_date="2026-06-17", end_date="2026-06-22")]

        open_dates = _calculator().open_start_dates(
            PackageType.FIVE_DAY_EXTENDED, "2026-06-10", "2026-06-25", existing
        )

        # 06-10 and 06-11 check out by 06-16, a day before bk-1 arrives
        assert open_dates == [
            pendulum.date(2026, 6, 10),
            pendulum.date(2026, 6, 11),
            pendulum.date(2026, 6, 24),
            pendulum.date(2026, 6, 25),
        ]

    def test_season_end_excludes_long_stays(self):
        open_dates = _calculator().open_start_dates(
            PackageType.TEN_DAY_EXPERIENCE, "2026-09-01", "2026-09-30", []
        )

        # Wednesdays in September whose checkout is on or before 09-30
        assert open_dates == [
            pendulum.date(2026, 9, 2),
            pendulum.date(2026, 9, 9),
            pendulum.date(2026, 9, 16),
        ]
