"""RetryAssignmentUseCase — re-run automatic matching from the stored report."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from civic_routing.application.ports.report_repo import ReportRepository
from civic_routing.application.ports.transaction import TransactionManager
from civic_routing.application.use_cases.assign_authority import AssignAuthorityUseCase
from civic_routing.domain.entities.assignment import AssignmentResult
from civic_routing.domain.exceptions import (
    InvalidAssignmentRequestError,
    ReportNotFoundError,
)
from civic_routing.domain.value_objects.enums import Trigger

logger = logging.getLogger(__name__)


class RetryAssignmentUseCase:
    """Useful after the routing catalog changes."""

    def __init__(
        self,
        assign: AssignAuthorityUseCase,
        report_repo: ReportRepository,
        tx: TransactionManager,
    ):
        self._assign = assign
        self._reports = report_repo
        self._tx = tx

    async def execute(self, report_id: int, actor_id: int | None = None) -> AssignmentResult:
        """Retry matching with the report's own category, city and region.

        A report without a city yields UNASSIGNED_CONFIGURATION_ERROR.
        """
        if not report_id:
            raise InvalidAssignmentRequestError("report_id is required")

        async with self._tx.transaction():
            report = await self._reports.get_for_update(report_id)
            if report is None:
                raise ReportNotFoundError(report_id)
            return await self._assign.apply(
                report,
                report.issue_category_id,
                report.city_id,
                report.region,
                Trigger.RETRY,
                actor_id,
            )


@dataclass
class RetryResult:
    """Summary of one report's retry inside a batch."""

    report_id: int
    result: AssignmentResult | None
    error: str | None = None


class BatchRetryAssignmentUseCase:
    """Retry every unassigned report, one transaction per report."""

    def __init__(
        self,
        retry: RetryAssignmentUseCase,
        report_repo: ReportRepository,
        tx: TransactionManager,
    ):
        self._retry = retry
        self._reports = report_repo
        self._tx = tx

    async def execute(self, actor_id: int | None = None) -> list[RetryResult]:
        # Close the read before retrying so each retry commits on its own.
        async with self._tx.transaction():
            reports = await self._reports.get_unassigned()
        logger.info("Batch retry of %d unassigned reports", len(reports))

        results = []
        for report in reports:
            try:
                result = await self._retry.execute(report.id, actor_id)
                results.append(RetryResult(report_id=report.id, result=result))
            except Exception as e:
                logger.exception("Error retrying assignment for report %d", report.id)
                results.append(RetryResult(report_id=report.id, result=None, error=str(e)))

        assigned = sum(1 for r in results if r.result is not None and r.result.is_assigned())
        logger.info("Batch retry complete: %d/%d assigned", assigned, len(results))
        return results
