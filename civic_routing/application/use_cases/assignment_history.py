"""GetAssignmentHistoryUseCase — read-only audit view of a report's ledger."""

from __future__ import annotations

from civic_routing.application.ports.ledger_repo import AssignmentLedgerRepository
from civic_routing.application.ports.report_repo import ReportRepository
from civic_routing.domain.entities.assignment import AssignmentHistoryItem
from civic_routing.domain.exceptions import ReportNotFoundError


class GetAssignmentHistoryUseCase:
    def __init__(self, report_repo: ReportRepository, ledger_repo: AssignmentLedgerRepository):
        self._reports = report_repo
        self._ledger = ledger_repo

    async def execute(self, report_id: int) -> list[AssignmentHistoryItem]:
        """Return the report's decisions, oldest first."""
        if await self._reports.get_by_id(report_id) is None:
            raise ReportNotFoundError(report_id)
        entries = await self._ledger.get_by_report(report_id)
        return [AssignmentHistoryItem.from_entry(e) for e in entries]
