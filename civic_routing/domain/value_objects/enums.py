"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class Trigger(str, Enum):
    SYSTEM = "system"  # automatic, on report creation
    ADMIN = "admin"  # explicit operator action
    RETRY = "retry"  # operator-requested re-run of automatic matching


class AssignmentOutcome(str, Enum):
    ASSIGNED = "ASSIGNED"
    UNASSIGNED_NO_MATCHING_AUTHORITY = "UNASSIGNED_NO_MATCHING_AUTHORITY"
    UNASSIGNED_AUTHORITY_INACTIVE = "UNASSIGNED_AUTHORITY_INACTIVE"
    UNASSIGNED_CONFIGURATION_ERROR = "UNASSIGNED_CONFIGURATION_ERROR"
    REASSIGNED_BY_ADMIN = "REASSIGNED_BY_ADMIN"


class MatchFailure(str, Enum):
    NO_MAPPING = "no_mapping"
    NO_AUTHORITY_IN_CITY = "no_authority_in_city"
    AUTHORITY_INACTIVE = "authority_inactive"
    MISSING_CITY = "missing_city"


class MatchKind(str, Enum):
    REGION = "region"
    CITY_FALLBACK = "city_fallback"  # region supplied but nothing matched it
    CITY = "city"  # no region supplied


_FAILURE_OUTCOMES: dict[MatchFailure, AssignmentOutcome] = {
    MatchFailure.NO_MAPPING: AssignmentOutcome.UNASSIGNED_NO_MATCHING_AUTHORITY,
    MatchFailure.NO_AUTHORITY_IN_CITY: AssignmentOutcome.UNASSIGNED_NO_MATCHING_AUTHORITY,
    MatchFailure.AUTHORITY_INACTIVE: AssignmentOutcome.UNASSIGNED_AUTHORITY_INACTIVE,
    MatchFailure.MISSING_CITY: AssignmentOutcome.UNASSIGNED_CONFIGURATION_ERROR,
}


def outcome_for_failure(failure: MatchFailure) -> AssignmentOutcome:
    """Map a resolver failure to the unassigned outcome it produces."""
    return _FAILURE_OUTCOMES[failure]


def parse_trigger(value: "Trigger | str") -> Trigger:
    """Coerce a raw trigger value. Raises ValueError for unknown values."""
    if isinstance(value, Trigger):
        return value
    return Trigger(str(value).strip().lower())
