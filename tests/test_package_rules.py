"""
Tests for the package rules table.
"""

import pytest

from venuebooking.domain.exceptions import PreconditionViolation
from venuebooking.domain.models import PackageType, Weekday
from venuebooking.domain.package_rules import (
    PACKAGE_RULES,
    allowed_start_weekdays,
    duration_nights,
    get_package_rule,
)


class TestPackageRules:
    """Tests for package durations and start days."""

    def test_every_package_has_a_rule(self):
        assert set(PACKAGE_RULES) == set(PackageType)

    def test_durations(self):
        assert duration_nights(PackageType.THREE_DAY_WEEKEND) == 3
        assert duration_nights(PackageType.FIVE_DAY_EXTENDED) == 5
        assert duration_nights(PackageType.TEN_DAY_EXPERIENCE) == 10

    def test_start_weekdays(self):
        assert allowed_start_weekdays(PackageType.THREE_DAY_WEEKEND) == {Weekday.FRIDAY}
        assert allowed_start_weekdays(PackageType.FIVE_DAY_EXTENDED) == {
            Weekday.WEDNESDAY,
            Weekday.THURSDAY,
        }
        assert allowed_start_weekdays(PackageType.TEN_DAY_EXPERIENCE) == {Weekday.WEDNESDAY}

    def test_describe_start_days(self):
        assert get_package_rule(PackageType.THREE_DAY_WEEKEND).describe_start_days() == "Friday"
        assert (
            get_package_rule(PackageType.FIVE_DAY_EXTENDED).describe_start_days()
            == "Wednesday or Thursday"
        )

    def test_lookup_with_raw_string_raises(self):
        """Lookups only accept PackageType members; unparsed input is a caller bug."""
        with pytest.raises(PreconditionViolation):
            get_package_rule("3_day_weekend")
