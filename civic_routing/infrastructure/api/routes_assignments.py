"""Assignment endpoints — admin reassignment, retry, and audit history."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from civic_routing.application.use_cases.assignment_history import GetAssignmentHistoryUseCase
from civic_routing.application.use_cases.reassign_authority import ReassignAuthorityUseCase
from civic_routing.application.use_cases.retry_assignment import (
    BatchRetryAssignmentUseCase,
    RetryAssignmentUseCase,
)
from civic_routing.domain.entities.assignment import AssignmentHistoryItem, AssignmentResult
from civic_routing.infrastructure.api.dependencies import (
    get_batch_retry_uc,
    get_history_uc,
    get_reassign_uc,
    get_retry_uc,
)

router = APIRouter(prefix="/reports", tags=["assignments"])

# ── Request schemas ─────────────────────────────────────────────────


class ReassignRequest(BaseModel):
    authority_id: int | None  # null = explicit unassignment
    actor_id: int


class RetryRequest(BaseModel):
    actor_id: int | None = None


# ── Endpoints ───────────────────────────────────────────────────────


@router.post("/assignment/retry-unassigned")
async def retry_unassigned(
    body: RetryRequest | None = None,
    batch_uc: BatchRetryAssignmentUseCase = Depends(get_batch_retry_uc),
):
    """Re-run automatic matching for every report without an authority."""
    results = await batch_uc.execute(body.actor_id if body else None)

    return {
        "status": "ok",
        "total_processed": len(results),
        "assigned": sum(1 for r in results if r.result is not None and r.result.is_assigned()),
        "failed": sum(1 for r in results if r.error is not None),
        "results": [
            {
                "report_id": r.report_id,
                **(_result_to_dict(r.result) if r.result else {}),
                "error": r.error,
            }
            for r in results
        ],
    }


@router.post("/{report_id}/assignment/reassign")
async def reassign(
    report_id: int,
    body: ReassignRequest,
    reassign_uc: ReassignAuthorityUseCase = Depends(get_reassign_uc),
):
    """Admin override: assign a specific authority, or null to unassign."""
    result = await reassign_uc.execute(report_id, body.authority_id, body.actor_id)
    return _result_to_dict(result)


@router.post("/{report_id}/assignment/retry")
async def retry(
    report_id: int,
    body: RetryRequest | None = None,
    retry_uc: RetryAssignmentUseCase = Depends(get_retry_uc),
):
    """Re-run automatic matching from the report's stored category/city/region."""
    result = await retry_uc.execute(report_id, body.actor_id if body else None)
    return _result_to_dict(result)


@router.get("/{report_id}/assignment/history")
async def assignment_history(
    report_id: int,
    history_uc: GetAssignmentHistoryUseCase = Depends(get_history_uc),
):
    """Ledger entries for a report, oldest first."""
    items = await history_uc.execute(report_id)
    return {
        "report_id": report_id,
        "total": len(items),
        "entries": [_history_to_dict(i) for i in items],
    }


def _result_to_dict(r: AssignmentResult) -> dict:
    return {
        "outcome": r.outcome.value,
        "authority_id": r.authority_id,
        "reason": r.reason,
    }


def _history_to_dict(i: AssignmentHistoryItem) -> dict:
    return {
        "timestamp": i.timestamp.isoformat() if i.timestamp else None,
        "from_authority_id": i.from_authority_id,
        "to_authority_id": i.to_authority_id,
        "outcome": i.outcome.value,
        "reason": i.reason,
        "actor_id": i.actor_id,
        "trigger": i.trigger.value,
    }
