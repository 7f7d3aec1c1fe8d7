"""SQLAlchemy repository implementations."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from civic_routing.adapters.persistence.models import (
    AssignmentLedgerModel,
    AuthorityCategoryModel,
    AuthorityModel,
    ReportModel,
)
from civic_routing.application.ports.authority_repo import AuthorityRepository
from civic_routing.application.ports.ledger_repo import AssignmentLedgerRepository
from civic_routing.application.ports.report_repo import ReportRepository
from civic_routing.domain.entities.assignment import AssignmentLedgerEntry
from civic_routing.domain.entities.authority import Authority
from civic_routing.domain.entities.report import Report
from civic_routing.domain.value_objects.enums import AssignmentOutcome, Trigger

# ─── Mappers ─────────────────────────────────────────────────────────


def _authority_to_domain(m: AuthorityModel) -> Authority:
    return Authority(
        id=m.id,
        name=m.name,
        city_id=m.city_id,
        region=m.region,
        is_active=m.is_active,
        address=m.address,
        created_at=m.created_at,
    )


def _report_to_domain(m: ReportModel) -> Report:
    return Report(
        id=m.id,
        issue_category_id=m.issue_category_id,
        city_id=m.city_id,
        region=m.region,
        authority_id=m.authority_id,
        title=m.title,
        description=m.description,
        status=m.status,
        created_at=m.created_at,
    )


def _ledger_to_domain(m: AssignmentLedgerModel) -> AssignmentLedgerEntry:
    return AssignmentLedgerEntry(
        id=m.id,
        report_id=m.report_id,
        actor_id=m.actor_id,
        trigger=Trigger(m.trigger),
        outcome=AssignmentOutcome(m.outcome),
        previous_authority_id=m.previous_authority_id,
        new_authority_id=m.new_authority_id,
        reason=m.reason,
        created_at=m.created_at,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlReportRepository(ReportRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, report: Report) -> Report:
        m = ReportModel(
            title=report.title,
            description=report.description,
            issue_category_id=report.issue_category_id,
            city_id=report.city_id,
            region=report.region,
            authority_id=None,
            status=report.status,
        )
        self._s.add(m)
        await self._s.flush()
        report.id = m.id
        report.authority_id = None
        return report

    async def get_by_id(self, report_id: int) -> Report | None:
        m = await self._s.get(ReportModel, report_id)
        return _report_to_domain(m) if m else None

    async def get_for_update(self, report_id: int) -> Report | None:
        result = await self._s.execute(
            select(ReportModel)
            .where(ReportModel.id == report_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        m = result.scalar_one_or_none()
        return _report_to_domain(m) if m else None

    async def get_unassigned(self) -> list[Report]:
        result = await self._s.execute(
            select(ReportModel)
            .where(ReportModel.authority_id.is_(None))
            .order_by(ReportModel.id)
        )
        return [_report_to_domain(m) for m in result.scalars()]

    async def set_authority(self, report_id: int, authority_id: int | None) -> None:
        await self._s.execute(
            update(ReportModel)
            .where(ReportModel.id == report_id)
            .values(authority_id=authority_id)
        )
        await self._s.flush()


class SqlAuthorityRepository(AuthorityRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_by_id(self, authority_id: int) -> Authority | None:
        m = await self._s.get(AuthorityModel, authority_id)
        return _authority_to_domain(m) if m else None

    async def get_by_category(self, issue_category_id: int) -> list[Authority]:
        # Inactive authorities are returned too; eligibility is decided by the
        # matching policy, not by the query.
        result = await self._s.execute(
            select(AuthorityModel)
            .join(
                AuthorityCategoryModel,
                AuthorityCategoryModel.authority_id == AuthorityModel.id,
            )
            .where(AuthorityCategoryModel.issue_category_id == issue_category_id)
            .order_by(AuthorityModel.created_at, AuthorityModel.id)
        )
        return [_authority_to_domain(m) for m in result.scalars()]


class SqlAssignmentLedgerRepository(AssignmentLedgerRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def append(self, entry: AssignmentLedgerEntry) -> AssignmentLedgerEntry:
        m = AssignmentLedgerModel(
            report_id=entry.report_id,
            actor_id=entry.actor_id,
            trigger=entry.trigger.value,
            outcome=entry.outcome.value,
            previous_authority_id=entry.previous_authority_id,
            new_authority_id=entry.new_authority_id,
            reason=entry.reason,
        )
        self._s.add(m)
        await self._s.flush()
        await self._s.refresh(m, attribute_names=["created_at"])
        entry.id = m.id
        entry.created_at = m.created_at
        return entry

    async def get_by_report(self, report_id: int) -> list[AssignmentLedgerEntry]:
        result = await self._s.execute(
            select(AssignmentLedgerModel)
            .where(AssignmentLedgerModel.report_id == report_id)
            .order_by(AssignmentLedgerModel.id)
        )
        return [_ledger_to_domain(m) for m in result.scalars()]
