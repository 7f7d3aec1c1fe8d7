"""Port interface for the append-only assignment ledger."""

from abc import ABC, abstractmethod

from civic_routing.domain.entities.assignment import AssignmentLedgerEntry


class AssignmentLedgerRepository(ABC):
    @abstractmethod
    async def append(self, entry: AssignmentLedgerEntry) -> AssignmentLedgerEntry:
        ...

    @abstractmethod
    async def get_by_report(self, report_id: int) -> list[AssignmentLedgerEntry]:
        """Return all entries for a report, oldest first."""
        ...
