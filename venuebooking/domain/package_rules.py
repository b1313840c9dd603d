"""
Static package rules: stay length and legal start weekdays per package type.
"""

from typing import Dict, FrozenSet

from .exceptions import PreconditionViolation
from .models import PackageRule, PackageType, Weekday


PACKAGE_RULES: Dict[PackageType, PackageRule] = {
    PackageType.THREE_DAY_WEEKEND: PackageRule(
        duration_nights=3,
        allowed_start_weekdays=frozenset({Weekday.FRIDAY}),
    ),
    PackageType.FIVE_DAY_EXTENDED: PackageRule(
        duration_nights=5,
        allowed_start_weekdays=frozenset({Weekday.WEDNESDAY, Weekday.THURSDAY}),
    ),
    PackageType.TEN_DAY_EXPERIENCE: PackageRule(
        duration_nights=10,
        allowed_start_weekdays=frozenset({Weekday.WEDNESDAY}),
    ),
}

_missing = set(PackageType) - set(PACKAGE_RULES)
if _missing:
    raise RuntimeError(
        f"No package rule defined for: {', '.join(sorted(p.value for p in _missing))}"
    )


def get_package_rule(package_type: PackageType) -> PackageRule:
    """
    Look up the rule for a package type.

    Raises:
        PreconditionViolation: If ``package_type`` is not a PackageType member
    """
    if not isinstance(package_type, PackageType):
        raise PreconditionViolation(f"Not a package type: {package_type!r}")
    return PACKAGE_RULES[package_type]


def duration_nights(package_type: PackageType) -> int:
    return get_package_rule(package_type).duration_nights


def allowed_start_weekdays(package_type: PackageType) -> FrozenSet[Weekday]:
    return get_package_rule(package_type).allowed_start_weekdays
