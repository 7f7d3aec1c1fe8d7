"""AssignAuthorityUseCase — automatic matching of a report to an authority."""

from __future__ import annotations

import logging

from civic_routing.application.ports.ledger_repo import AssignmentLedgerRepository
from civic_routing.application.ports.report_repo import ReportRepository
from civic_routing.application.ports.transaction import TransactionManager
from civic_routing.application.use_cases.resolve_authority import AuthorityResolver
from civic_routing.domain.entities.assignment import AssignmentLedgerEntry, AssignmentResult
from civic_routing.domain.entities.report import Report
from civic_routing.domain.exceptions import (
    InvalidAssignmentRequestError,
    ReportNotFoundError,
)
from civic_routing.domain.value_objects.enums import (
    AssignmentOutcome,
    Trigger,
    outcome_for_failure,
    parse_trigger,
)

logger = logging.getLogger(__name__)


async def record_decision(
    reports: ReportRepository,
    ledger: AssignmentLedgerRepository,
    report: Report,
    *,
    new_authority_id: int | None,
    outcome: AssignmentOutcome,
    reason: str,
    trigger: Trigger,
    actor_id: int,
) -> AssignmentResult:
    """Write the report's new authority and its ledger entry.

    Must run inside an open transaction with the report row locked.
    """
    previous = report.authority_id
    await reports.set_authority(report.id, new_authority_id)
    await ledger.append(
        AssignmentLedgerEntry(
            id=None,
            report_id=report.id,
            actor_id=actor_id,
            trigger=trigger,
            outcome=outcome,
            previous_authority_id=previous,
            new_authority_id=new_authority_id,
            reason=reason,
        )
    )
    report.authority_id = new_authority_id

    log = logger.info if new_authority_id is not None else logger.warning
    log(
        "Report %d [%s by %d]: %s (authority %s → %s): %s",
        report.id, trigger.value, actor_id, outcome.value,
        previous, new_authority_id, reason,
    )
    return AssignmentResult(outcome=outcome, authority_id=new_authority_id, reason=reason)


class AssignAuthorityUseCase:
    """Runs the resolver for a report and records exactly one outcome."""

    def __init__(
        self,
        report_repo: ReportRepository,
        ledger_repo: AssignmentLedgerRepository,
        resolver: AuthorityResolver,
        tx: TransactionManager,
        system_actor_id: int,
    ):
        self._reports = report_repo
        self._ledger = ledger_repo
        self._resolver = resolver
        self._tx = tx
        self._system_actor_id = system_actor_id

    async def execute(
        self,
        report_id: int,
        issue_category_id: int,
        city_id: int | None,
        region: str | None = None,
        trigger: Trigger | str = Trigger.SYSTEM,
        actor_id: int | None = None,
    ) -> AssignmentResult:
        """Assign (or clear) the report's authority.

        Raises:
            InvalidAssignmentRequestError: bad trigger, missing admin actor,
                missing category or city. Raised before any transaction opens.
            ReportNotFoundError: the report does not exist.
        """
        if not report_id:
            raise InvalidAssignmentRequestError("report_id is required for assignment")
        if not issue_category_id:
            raise InvalidAssignmentRequestError("issue_category_id is required for assignment")
        if not city_id:
            raise InvalidAssignmentRequestError("city_id is required for assignment")
        try:
            trigger = parse_trigger(trigger)
        except ValueError:
            allowed = ", ".join(t.value for t in Trigger)
            raise InvalidAssignmentRequestError(f"trigger must be one of: {allowed}")
        if trigger == Trigger.ADMIN and actor_id is None:
            raise InvalidAssignmentRequestError("actor_id is required for admin-triggered assignments")

        async with self._tx.transaction():
            report = await self._reports.get_for_update(report_id)
            if report is None:
                raise ReportNotFoundError(report_id)
            return await self.apply(
                report, issue_category_id, city_id, region, trigger, actor_id
            )

    async def apply(
        self,
        report: Report,
        issue_category_id: int,
        city_id: int | None,
        region: str | None,
        trigger: Trigger,
        actor_id: int | None,
    ) -> AssignmentResult:
        """Resolve and record for an already locked report (caller owns the transaction)."""
        if trigger == Trigger.ADMIN and actor_id is None:
            raise InvalidAssignmentRequestError("actor_id is required for admin-triggered assignments")
        if trigger == Trigger.SYSTEM or actor_id is None:
            actor_id = self._system_actor_id

        match = await self._resolver.resolve(issue_category_id, city_id, region)
        logger.debug(
            "Report %d resolved via %s: %s",
            report.id, match.kind.value if match.kind else "none",
            "matched" if match.matched else match.failure.value,
        )
        if match.matched:
            outcome = AssignmentOutcome.ASSIGNED
            new_authority_id = match.authority.id
        else:
            outcome = outcome_for_failure(match.failure)
            new_authority_id = None

        return await record_decision(
            self._reports,
            self._ledger,
            report,
            new_authority_id=new_authority_id,
            outcome=outcome,
            reason=match.reason,
            trigger=trigger,
            actor_id=actor_id,
        )
