# medicare/services/doses.py
from datetime import date, tzinfo
from typing import Optional

from medicare.schemas import MISSED, TAKEN, DailyStatus, DoseItem, parse_timestamp


def next_pending_dose(status: Optional[DailyStatus]) -> Optional[DoseItem]:
    """
    Earliest dose not yet taken, or None when everything is confirmed
    (or nothing has been loaded). Equal times keep the backend's list order.
    """
    if status is None:
        return None
    pending = [item for item in status.items if item.status != TAKEN]
    if not pending:
        return None
    # min() returns the first of equal keys
    return min(pending, key=lambda item: item.scheduled_at)


def format_time(iso: str, tz: Optional[tzinfo] = None) -> str:
    return parse_timestamp(iso).astimezone(tz).strftime("%H:%M")


def format_datetime(iso: Optional[str], tz: Optional[tzinfo] = None) -> str:
    if not iso:
        return "-"
    return parse_timestamp(iso).astimezone(tz).strftime("%Y-%m-%d %H:%M")


def format_today(today: Optional[date] = None) -> str:
    return (today or date.today()).strftime("%A, %B %d, %Y")


def status_badge(status: str) -> str:
    """Streamlit markdown colour badge for a dose status."""
    if status == TAKEN:
        return f":green[{status}]"
    if status == MISSED:
        return f":red[{status}]"
    return f":gray[{status}]"
