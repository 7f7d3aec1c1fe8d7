"""Authority entity — a government office handling categories in a city/region."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Authority:
    id: int | None
    name: str
    city_id: int
    region: str
    is_active: bool = True
    address: str | None = None
    created_at: datetime | None = None

    def belongs_to_city(self, city_id: int | None) -> bool:
        return city_id is not None and self.city_id == city_id
