"""AuthorityMatchingPolicy — deterministic choice of the authority for a report."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from civic_routing.domain.entities.authority import Authority
from civic_routing.domain.value_objects.enums import MatchFailure, MatchKind


@dataclass(frozen=True)
class AuthorityMatch:
    """Result of the matching policy.

    Exactly one of ``authority`` / ``failure`` is set.
    """

    authority: Authority | None
    failure: MatchFailure | None
    kind: MatchKind | None
    reason: str

    @property
    def matched(self) -> bool:
        return self.authority is not None


def normalize_region(region: str | None) -> str | None:
    """Strip a region hint; blank input counts as no region."""
    if region is None:
        return None
    region = region.strip()
    return region or None


def region_matches(authority_region: str | None, region: str | None) -> bool:
    """Case-insensitive exact equality. Prefixes and substrings do not match."""
    wanted = normalize_region(region)
    have = normalize_region(authority_region)
    if wanted is None or have is None:
        return False
    return have.casefold() == wanted.casefold()


def creation_order_key(authority: Authority) -> tuple[datetime, int]:
    """Sort key for the oldest-wins tie-break (created_at, then id)."""
    return (authority.created_at or datetime.min, authority.id or 0)


def is_eligible(authority: Authority) -> bool:
    """An authority may receive reports only while it is active."""
    return authority.is_active


def match_authority(
    issue_category_id: int,
    city_id: int | None,
    region: str | None,
    candidates: list[Authority],
) -> AuthorityMatch:
    """Pure function: pick the authority for a report.

    Args:
        issue_category_id: category of the report.
        city_id: city of the report (None means the report was never located).
        region: optional free-text region hint.
        candidates: every authority mapped to the category, active or not.

    Rules:
      1. No mapped authority  →  NO_MAPPING.
      2. None of them in the city  →  NO_AUTHORITY_IN_CITY.
      3. Region given and an authority's region equals it  →  that authority.
      4. Otherwise the oldest authority in the city.
      5. The chosen authority is inactive  →  AUTHORITY_INACTIVE. There is no
         fallback to another candidate.
    """
    if city_id is None:
        return AuthorityMatch(
            authority=None,
            failure=MatchFailure.MISSING_CITY,
            kind=None,
            reason="Report has no city recorded, cannot match an authority",
        )

    if not candidates:
        return AuthorityMatch(
            authority=None,
            failure=MatchFailure.NO_MAPPING,
            kind=None,
            reason=f"No authority configured for issue category ID {issue_category_id}",
        )

    in_city = sorted(
        (a for a in candidates if a.belongs_to_city(city_id)),
        key=creation_order_key,
    )
    if not in_city:
        return AuthorityMatch(
            authority=None,
            failure=MatchFailure.NO_AUTHORITY_IN_CITY,
            kind=None,
            reason=(
                f"No authority in city ID {city_id} is configured to handle "
                f"issue category ID {issue_category_id}"
            ),
        )

    wanted_region = normalize_region(region)
    chosen: Authority | None = None
    if wanted_region is not None:
        chosen = next((a for a in in_city if region_matches(a.region, wanted_region)), None)

    if chosen is not None:
        kind = MatchKind.REGION
        reason = (
            f'Matched authority "{chosen.name}" for city ID {city_id}, '
            f'region "{wanted_region}", issue category {issue_category_id}'
        )
    else:
        chosen = in_city[0]
        if wanted_region is not None:
            kind = MatchKind.CITY_FALLBACK
            reason = (
                f'No authority matched region "{wanted_region}", assigned to '
                f'"{chosen.name}" (city fallback)'
            )
        else:
            kind = MatchKind.CITY
            reason = (
                f'Matched authority "{chosen.name}" for city ID {city_id}, '
                f"issue category {issue_category_id}"
            )

    if not is_eligible(chosen):
        return AuthorityMatch(
            authority=None,
            failure=MatchFailure.AUTHORITY_INACTIVE,
            kind=kind,
            reason=(
                f'Authority "{chosen.name}" (ID: {chosen.id}) selected for city ID '
                f"{city_id}, issue category {issue_category_id} is inactive"
            ),
        )

    return AuthorityMatch(authority=chosen, failure=None, kind=kind, reason=reason)
