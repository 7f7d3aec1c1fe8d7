"""Routing catalog reference data — which authority handles which category."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthorityCategoryMapping:
    """Declares that an authority is eligible for an issue category."""

    authority_id: int
    issue_category_id: int
