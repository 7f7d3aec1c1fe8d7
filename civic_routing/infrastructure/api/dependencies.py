"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from civic_routing.adapters.persistence.database import get_session
from civic_routing.adapters.persistence.repositories import (
    SqlAssignmentLedgerRepository,
    SqlAuthorityRepository,
    SqlReportRepository,
)
from civic_routing.adapters.persistence.transaction import SqlTransactionManager
from civic_routing.application.use_cases.assign_authority import AssignAuthorityUseCase
from civic_routing.application.use_cases.assignment_history import GetAssignmentHistoryUseCase
from civic_routing.application.use_cases.reassign_authority import ReassignAuthorityUseCase
from civic_routing.application.use_cases.resolve_authority import AuthorityResolver
from civic_routing.application.use_cases.retry_assignment import (
    BatchRetryAssignmentUseCase,
    RetryAssignmentUseCase,
)
from civic_routing.config import settings


def build_assign_uc(session: AsyncSession) -> AssignAuthorityUseCase:
    """Also used by report intake, which passes its own session so that
    creating the report and assigning it share one transaction."""
    return AssignAuthorityUseCase(
        report_repo=SqlReportRepository(session),
        ledger_repo=SqlAssignmentLedgerRepository(session),
        resolver=AuthorityResolver(SqlAuthorityRepository(session)),
        tx=SqlTransactionManager(session),
        system_actor_id=settings.system_actor_id,
    )


def _build_retry_uc(session: AsyncSession) -> RetryAssignmentUseCase:
    return RetryAssignmentUseCase(
        assign=build_assign_uc(session),
        report_repo=SqlReportRepository(session),
        tx=SqlTransactionManager(session),
    )


def get_reassign_uc(session: AsyncSession = Depends(get_session)) -> ReassignAuthorityUseCase:
    return ReassignAuthorityUseCase(
        report_repo=SqlReportRepository(session),
        authority_repo=SqlAuthorityRepository(session),
        ledger_repo=SqlAssignmentLedgerRepository(session),
        tx=SqlTransactionManager(session),
    )


def get_retry_uc(session: AsyncSession = Depends(get_session)) -> RetryAssignmentUseCase:
    return _build_retry_uc(session)


def get_batch_retry_uc(
    session: AsyncSession = Depends(get_session),
) -> BatchRetryAssignmentUseCase:
    return BatchRetryAssignmentUseCase(
        retry=_build_retry_uc(session),
        report_repo=SqlReportRepository(session),
        tx=SqlTransactionManager(session),
    )


def get_history_uc(session: AsyncSession = Depends(get_session)) -> GetAssignmentHistoryUseCase:
    return GetAssignmentHistoryUseCase(
        report_repo=SqlReportRepository(session),
        ledger_repo=SqlAssignmentLedgerRepository(session),
    )
