# medicare/schemas.py
from datetime import datetime, timezone
from typing import List, Optional, Union

from pydantic import BaseModel, field_validator

TAKEN = "taken"
MISSED = "missed"
PENDING = "pending"


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp from the API into an aware datetime.
    A trailing "Z" and naive timestamps are read as UTC.
    """
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class DoseItem(BaseModel):
    medication_id: str
    scheduled_time: str
    status: str = PENDING

    @field_validator("scheduled_time")
    @classmethod
    def _check_timestamp(cls, v: str) -> str:
        parse_timestamp(v)
        return v

    @property
    def scheduled_at(self) -> datetime:
        return parse_timestamp(self.scheduled_time)


class DailyStatus(BaseModel):
    taken: int = 0
    total_doses: int = 0
    items: List[DoseItem] = []


class HistoryEntry(BaseModel):
    id: Union[int, str]
    medication_id: str
    scheduled_time: Optional[str] = None
    status: str

    @field_validator("scheduled_time")
    @classmethod
    def _check_timestamp(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            parse_timestamp(v)
        return v


class InventoryAlert(BaseModel):
    medication_id: str
    name: str
    inventory_count: int
    low_threshold: int


class DashboardSnapshot(BaseModel):
    history: List[HistoryEntry] = []
    missed: List[HistoryEntry] = []
    inventory_alerts: List[InventoryAlert] = []


class DoseConfirmation(BaseModel):
    user_id: str
    medication_id: str
    scheduled_time_iso: str
