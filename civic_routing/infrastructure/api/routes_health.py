"""Readiness of the assignment engine: database plus a usable routing catalog."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from civic_routing.adapters.persistence.database import get_session
from civic_routing.adapters.persistence.models import (
    AssignmentLedgerModel,
    AuthorityCategoryModel,
    AuthorityModel,
    ReportModel,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

SERVICE_NAME = "civic-routing - Authority Assignment Engine"


async def _count(session: AsyncSession, model, *where) -> int:
    stmt = select(func.count()).select_from(model)
    if where:
        stmt = stmt.where(*where)
    return (await session.execute(stmt)).scalar_one()


@router.get("/health")
async def health_check(session: AsyncSession = Depends(get_session)):
    """Report "ok" only when automatic matching can assign something.

    An empty catalog (no active authority or no category mapping) is
    "degraded": every report would end up unassigned.
    """
    try:
        catalog = {
            "active_authorities": await _count(
                session, AuthorityModel, AuthorityModel.is_active.is_(True)
            ),
            "category_mappings": await _count(session, AuthorityCategoryModel),
            "unassigned_reports": await _count(
                session, ReportModel, ReportModel.authority_id.is_(None)
            ),
            "ledger_entries": await _count(session, AssignmentLedgerModel),
        }
    except SQLAlchemyError as e:
        logger.warning("Health check failed: %s", e)
        return {
            "status": "degraded",
            "database": f"error: {e.__class__.__name__}",
            "service": SERVICE_NAME,
        }

    routable = catalog["active_authorities"] > 0 and catalog["category_mappings"] > 0
    return {
        "status": "ok" if routable else "degraded",
        "database": "connected",
        "catalog": catalog,
        "service": SERVICE_NAME,
    }
