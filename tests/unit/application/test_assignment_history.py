"""Tests for GetAssignmentHistoryUseCase."""

from __future__ import annotations

import pytest

from civic_routing.domain.exceptions import ReportNotFoundError
from civic_routing.domain.value_objects.enums import AssignmentOutcome, Trigger
from tests.fakes import make_authority, make_engine, make_report


@pytest.mark.asyncio
async def test_history_is_oldest_first():
    engine = make_engine([make_authority(1), make_authority(2)])

    await engine.assign.execute(1, 1, 1)
    await engine.reassign.execute(1, 2, actor_id=42)
    await engine.reassign.execute(1, None, actor_id=42)

    history = await engine.history.execute(1)

    assert [h.outcome for h in history] == [
        AssignmentOutcome.ASSIGNED,
        AssignmentOutcome.REASSIGNED_BY_ADMIN,
        AssignmentOutcome.REASSIGNED_BY_ADMIN,
    ]
    assert [h.trigger for h in history] == [Trigger.SYSTEM, Trigger.ADMIN, Trigger.ADMIN]
    assert history[0].timestamp < history[1].timestamp < history[2].timestamp


@pytest.mark.asyncio
async def test_history_chain_reconstructs_current_authority():
    engine = make_engine([make_authority(1), make_authority(2)])

    await engine.assign.execute(1, 1, 1)
    await engine.reassign.execute(1, 2, actor_id=42)
    await engine.retry.execute(1)

    history = await engine.history.execute(1)

    assert history[0].from_authority_id is None
    for prev, cur in zip(history, history[1:]):
        assert cur.from_authority_id == prev.to_authority_id
    assert history[-1].to_authority_id == engine.reports.reports[1].authority_id


@pytest.mark.asyncio
async def test_history_only_for_requested_report():
    engine = make_engine([make_authority(1)], reports=[make_report(1), make_report(2)])

    await engine.assign.execute(1, 1, 1)
    await engine.assign.execute(2, 1, 1)

    assert len(await engine.history.execute(2)) == 1


@pytest.mark.asyncio
async def test_history_empty_for_untouched_report():
    engine = make_engine([])

    assert await engine.history.execute(1) == []


@pytest.mark.asyncio
async def test_history_unknown_report():
    engine = make_engine([], reports=[])

    with pytest.raises(ReportNotFoundError):
        await engine.history.execute(1)
