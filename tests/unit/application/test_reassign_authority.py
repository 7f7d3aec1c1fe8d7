"""Tests for ReassignAuthorityUseCase."""

from __future__ import annotations

import pytest

from civic_routing.domain.exceptions import (
    AuthorityNotFoundError,
    CrossCityReassignmentError,
    InactiveAuthorityError,
    InvalidAssignmentRequestError,
    ReportNotFoundError,
)
from civic_routing.domain.value_objects.enums import AssignmentOutcome, Trigger
from tests.fakes import make_authority, make_engine, make_report


def _engine(**kwargs):
    authorities = [
        make_authority(1, city_id=1, region="Zone 1"),
        make_authority(2, city_id=1, region="Zone 2"),
        make_authority(3, city_id=2, region="Zone 1"),
        make_authority(4, city_id=1, region="Zone 3", is_active=False),
    ]
    return make_engine(authorities, **kwargs)


@pytest.mark.asyncio
async def test_reassign_to_same_city_authority():
    engine = _engine(reports=[make_report(authority_id=1)])

    result = await engine.reassign.execute(1, 2, actor_id=42)

    assert result.outcome == AssignmentOutcome.REASSIGNED_BY_ADMIN
    assert result.authority_id == 2
    assert result.reason == 'Admin reassigned to authority "Authority 2" (ID: 2)'
    [entry] = engine.ledger.entries
    assert entry.previous_authority_id == 1
    assert entry.new_authority_id == 2
    assert entry.actor_id == 42
    assert entry.trigger == Trigger.ADMIN


@pytest.mark.asyncio
async def test_unassign_with_null_target():
    engine = _engine(reports=[make_report(authority_id=1)])

    result = await engine.reassign.execute(1, None, actor_id=42)

    assert result.authority_id is None
    assert result.reason == "Admin explicitly unassigned authority"
    assert engine.reports.reports[1].authority_id is None
    assert engine.ledger.entries[0].outcome == AssignmentOutcome.REASSIGNED_BY_ADMIN


@pytest.mark.asyncio
async def test_cross_city_rejected_without_writes():
    engine = _engine(reports=[make_report(authority_id=1)])

    with pytest.raises(CrossCityReassignmentError):
        await engine.reassign.execute(1, 3, actor_id=42)

    assert engine.reports.reports[1].authority_id == 1
    assert engine.ledger.entries == []


@pytest.mark.asyncio
async def test_inactive_target_rejected():
    engine = _engine()

    with pytest.raises(InactiveAuthorityError):
        await engine.reassign.execute(1, 4, actor_id=42)

    assert engine.ledger.entries == []


@pytest.mark.asyncio
async def test_unknown_target_raises_not_found():
    engine = _engine()

    with pytest.raises(AuthorityNotFoundError):
        await engine.reassign.execute(1, 404, actor_id=42)


@pytest.mark.asyncio
async def test_unknown_report_raises_not_found():
    engine = _engine(reports=[])

    with pytest.raises(ReportNotFoundError):
        await engine.reassign.execute(1, 2, actor_id=42)


@pytest.mark.asyncio
async def test_actor_required():
    engine = _engine()

    with pytest.raises(InvalidAssignmentRequestError):
        await engine.reassign.execute(1, 2, actor_id=None)

    assert engine.tx.opened == 0


@pytest.mark.asyncio
async def test_report_without_city_cannot_be_validated():
    engine = _engine(reports=[make_report(city_id=None)])

    with pytest.raises(InvalidAssignmentRequestError):
        await engine.reassign.execute(1, 2, actor_id=42)


@pytest.mark.asyncio
async def test_cross_city_checked_before_inactive():
    engine = _engine()
    engine.authorities.authorities[3].is_active = False

    with pytest.raises(CrossCityReassignmentError):
        await engine.reassign.execute(1, 3, actor_id=42)


@pytest.mark.asyncio
async def test_missing_city_checked_before_target_lookup():
    engine = _engine(reports=[make_report(city_id=None)])

    with pytest.raises(InvalidAssignmentRequestError):
        await engine.reassign.execute(1, 404, actor_id=42)

    assert engine.ledger.entries == []


@pytest.mark.asyncio
async def test_unassign_allowed_for_report_without_city():
    engine = _engine(reports=[make_report(city_id=None, authority_id=1)])

    result = await engine.reassign.execute(1, None, actor_id=42)

    assert result.authority_id is None
    assert engine.reports.reports[1].authority_id is None
