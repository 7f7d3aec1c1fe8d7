"""Report entity — a citizen-submitted civic complaint."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Report:
    id: int | None
    issue_category_id: int
    city_id: int | None
    region: str | None = None
    authority_id: int | None = None
    title: str | None = None
    description: str | None = None
    status: str = "reported"
    created_at: datetime | None = None
