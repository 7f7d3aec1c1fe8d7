"""Port interface for the routing catalog (read-only to the engine)."""

from abc import ABC, abstractmethod

from civic_routing.domain.entities.authority import Authority


class AuthorityRepository(ABC):
    @abstractmethod
    async def get_by_id(self, authority_id: int) -> Authority | None:
        """Return the authority whether or not it is active."""
        ...

    @abstractmethod
    async def get_by_category(self, issue_category_id: int) -> list[Authority]:
        """Return every authority mapped to the category, active or not."""
        ...
