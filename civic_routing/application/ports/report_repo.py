"""Port interface for report persistence."""

from abc import ABC, abstractmethod

from civic_routing.domain.entities.report import Report


class ReportRepository(ABC):
    @abstractmethod
    async def save(self, report: Report) -> Report:
        ...

    @abstractmethod
    async def get_by_id(self, report_id: int) -> Report | None:
        ...

    @abstractmethod
    async def get_for_update(self, report_id: int) -> Report | None:
        """Load a report and lock its row until the transaction ends.

        Must use row-level locking (SELECT ... FOR UPDATE) so concurrent
        assignment calls on the same report are serialized.
        """
        ...

    @abstractmethod
    async def get_unassigned(self) -> list[Report]:
        """Return reports with no authority, oldest first."""
        ...

    @abstractmethod
    async def set_authority(self, report_id: int, authority_id: int | None) -> None:
        ...
