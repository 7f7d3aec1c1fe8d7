"""Assignment ledger entry and the values returned to callers."""

from dataclasses import dataclass
from datetime import datetime

from civic_routing.domain.value_objects.enums import AssignmentOutcome, Trigger


@dataclass
class AssignmentLedgerEntry:
    """One immutable audit row per assignment decision."""

    id: int | None
    report_id: int
    actor_id: int
    trigger: Trigger
    outcome: AssignmentOutcome
    previous_authority_id: int | None
    new_authority_id: int | None
    reason: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class AssignmentResult:
    outcome: AssignmentOutcome
    authority_id: int | None
    reason: str

    def is_assigned(self) -> bool:
        return self.authority_id is not None


@dataclass(frozen=True)
class AssignmentHistoryItem:
    timestamp: datetime | None
    from_authority_id: int | None
    to_authority_id: int | None
    outcome: AssignmentOutcome
    reason: str
    actor_id: int
    trigger: Trigger

    @classmethod
    def from_entry(cls, entry: AssignmentLedgerEntry) -> "AssignmentHistoryItem":
        return cls(
            timestamp=entry.created_at,
            from_authority_id=entry.previous_authority_id,
            to_authority_id=entry.new_authority_id,
            outcome=entry.outcome,
            reason=entry.reason,
            actor_id=entry.actor_id,
            trigger=entry.trigger,
        )
