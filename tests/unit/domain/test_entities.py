"""Tests for domain entities and errors."""

from datetime import datetime

from civic_routing.domain.entities.assignment import (
    AssignmentHistoryItem,
    AssignmentLedgerEntry,
    AssignmentResult,
)
from civic_routing.domain.entities.authority import Authority
from civic_routing.domain.entities.report import Report
from civic_routing.domain.exceptions import (
    AssignmentError,
    AuthorityNotFoundError,
    CrossCityReassignmentError,
    InactiveAuthorityError,
    InvalidAssignmentRequestError,
    ReportNotFoundError,
)
from civic_routing.domain.value_objects.enums import AssignmentOutcome, Trigger


def test_authority_belongs_to_city():
    a = Authority(id=1, name="Roads Dept", city_id=5, region="North")
    assert a.belongs_to_city(5)
    assert not a.belongs_to_city(6)
    assert not a.belongs_to_city(None)


def test_authority_active_by_default():
    a = Authority(id=1, name="Roads Dept", city_id=5, region="North")
    assert a.is_active is True


def test_report_defaults():
    r = Report(id=None, issue_category_id=2, city_id=3)
    assert r.status == "reported"
    assert r.region is None


def test_assignment_result_is_assigned():
    assert AssignmentResult(AssignmentOutcome.ASSIGNED, 4, "ok").is_assigned()
    assert not AssignmentResult(
        AssignmentOutcome.UNASSIGNED_NO_MATCHING_AUTHORITY, None, "none"
    ).is_assigned()


def test_history_item_from_entry():
    ts = datetime(2026, 3, 1, 12, 0)
    entry = AssignmentLedgerEntry(
        id=10,
        report_id=1,
        actor_id=42,
        trigger=Trigger.ADMIN,
        outcome=AssignmentOutcome.REASSIGNED_BY_ADMIN,
        previous_authority_id=3,
        new_authority_id=4,
        reason="moved",
        created_at=ts,
    )
    item = AssignmentHistoryItem.from_entry(entry)
    assert item.timestamp == ts
    assert item.from_authority_id == 3
    assert item.to_authority_id == 4
    assert item.outcome == AssignmentOutcome.REASSIGNED_BY_ADMIN
    assert item.actor_id == 42
    assert item.trigger == Trigger.ADMIN
    assert item.reason == "moved"


def test_error_status_codes():
    assert InvalidAssignmentRequestError("x").status_code == 400
    assert ReportNotFoundError(1).status_code == 404
    assert AuthorityNotFoundError(1).status_code == 404
    assert CrossCityReassignmentError("x").status_code == 400
    assert InactiveAuthorityError("x").status_code == 400


def test_not_found_messages():
    err = ReportNotFoundError(12)
    assert err.message == "Report ID 12 not found"
    assert err.report_id == 12
    assert str(AuthorityNotFoundError(9)) == "Authority ID 9 not found"


def test_errors_share_base():
    for exc in (
        InvalidAssignmentRequestError("x"),
        ReportNotFoundError(1),
        AuthorityNotFoundError(1),
        CrossCityReassignmentError("x"),
        InactiveAuthorityError("x"),
    ):
        assert isinstance(exc, AssignmentError)
