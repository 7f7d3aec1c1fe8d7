"""ReassignAuthorityUseCase — explicit operator override, bypasses matching."""

from __future__ import annotations

import logging

from civic_routing.application.ports.authority_repo import AuthorityRepository
from civic_routing.application.ports.ledger_repo import AssignmentLedgerRepository
from civic_routing.application.ports.report_repo import ReportRepository
from civic_routing.application.ports.transaction import TransactionManager
from civic_routing.application.use_cases.assign_authority import record_decision
from civic_routing.domain.entities.assignment import AssignmentResult
from civic_routing.domain.exceptions import (
    AuthorityNotFoundError,
    CrossCityReassignmentError,
    InactiveAuthorityError,
    InvalidAssignmentRequestError,
    ReportNotFoundError,
)
from civic_routing.domain.policies.authority_matching import is_eligible
from civic_routing.domain.value_objects.enums import AssignmentOutcome, Trigger

logger = logging.getLogger(__name__)


class ReassignAuthorityUseCase:
    """Admin-only: point a report at a specific authority, or clear it.

    Unlike automatic matching, an unusable target is a loud failure: the
    operator gets an exception and nothing is written.
    """

    def __init__(
        self,
        report_repo: ReportRepository,
        authority_repo: AuthorityRepository,
        ledger_repo: AssignmentLedgerRepository,
        tx: TransactionManager,
    ):
        self._reports = report_repo
        self._authorities = authority_repo
        self._ledger = ledger_repo
        self._tx = tx

    async def execute(
        self, report_id: int, target_authority_id: int | None, actor_id: int | None
    ) -> AssignmentResult:
        """Reassign the report.

        Args:
            report_id: report to change.
            target_authority_id: new authority, or None to unassign.
            actor_id: admin performing the change.

        Raises:
            InvalidAssignmentRequestError: missing actor, or the report has no
                city to validate the target against.
            ReportNotFoundError / AuthorityNotFoundError: unknown ids.
            CrossCityReassignmentError: target serves another city.
            InactiveAuthorityError: target is disabled.
        """
        if not report_id:
            raise InvalidAssignmentRequestError("report_id is required")
        if actor_id is None:
            raise InvalidAssignmentRequestError("actor_id is required for reassignment")

        async with self._tx.transaction():
            report = await self._reports.get_for_update(report_id)
            if report is None:
                raise ReportNotFoundError(report_id)
            if target_authority_id is None:
                return await record_decision(
                    self._reports,
                    self._ledger,
                    report,
                    new_authority_id=None,
                    outcome=AssignmentOutcome.REASSIGNED_BY_ADMIN,
                    reason="Admin explicitly unassigned authority",
                    trigger=Trigger.ADMIN,
                    actor_id=actor_id,
                )

            if report.city_id is None:
                raise InvalidAssignmentRequestError(
                    f"Report ID {report_id} has no city recorded, cannot validate reassignment"
                )

            target = await self._authorities.get_by_id(target_authority_id)
            if target is None:
                raise AuthorityNotFoundError(target_authority_id)
            if not target.belongs_to_city(report.city_id):
                logger.warning(
                    "Rejected cross-city reassignment of report %d to authority %d",
                    report_id, target_authority_id,
                )
                raise CrossCityReassignmentError(
                    f'Authority "{target.name}" belongs to a different city. '
                    "Cross-city reassignment is not allowed."
                )
            if not is_eligible(target):
                raise InactiveAuthorityError(
                    f'Authority "{target.name}" is inactive and cannot be assigned'
                )

            return await record_decision(
                self._reports,
                self._ledger,
                report,
                new_authority_id=target.id,
                outcome=AssignmentOutcome.REASSIGNED_BY_ADMIN,
                reason=f'Admin reassigned to authority "{target.name}" (ID: {target.id})',
                trigger=Trigger.ADMIN,
                actor_id=actor_id,
            )
