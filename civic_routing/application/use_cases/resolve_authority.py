"""AuthorityResolver — reads the routing catalog and applies the matching policy."""

from __future__ import annotations

from civic_routing.application.ports.authority_repo import AuthorityRepository
from civic_routing.domain.policies.authority_matching import AuthorityMatch, match_authority


class AuthorityResolver:
    """Side-effect free: only reads the catalog through the given repository.

    Runs inside whatever transaction the repository's session holds, so the
    catalog snapshot is consistent with the report mutation that follows.
    """

    def __init__(self, authority_repo: AuthorityRepository):
        self._authorities = authority_repo

    async def resolve(
        self, issue_category_id: int, city_id: int | None, region: str | None = None
    ) -> AuthorityMatch:
        if city_id is None:
            return match_authority(issue_category_id, None, region, [])
        candidates = await self._authorities.get_by_category(issue_category_id)
        return match_authority(issue_category_id, city_id, region, candidates)
