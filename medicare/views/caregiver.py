# medicare/views/caregiver.py
from functools import partial
from typing import Callable, List, Optional

import pandas as pd
import streamlit as st

from medicare.schemas import DashboardSnapshot, HistoryEntry, InventoryAlert
from medicare.services.api import AdherenceApi
from medicare.services.doses import format_datetime, status_badge
from medicare.services.resource import Resource

STATE_KEY = "caregiver_view"
PATIENT_KEY = "caregiver_patient_id"

NO_HISTORY = "No doses recorded in the last 30 days."
NO_MISSED = "No missed doses in the last week."
NO_ALERTS = "All inventories look good."

HISTORY_COLUMNS = ["Medication", "Scheduled", "Status"]


class CaregiverDashboard:
    def __init__(self, api: AdherenceApi, patient_id: str):
        self.api = api
        self.patient_id = patient_id
        self.dashboard = Resource(api.get_dashboard, name="dashboard")
        # queued by widget callbacks, run by render() under a spinner
        self.pending: Optional[Callable[[], bool]] = None

    @property
    def snapshot(self) -> Optional[DashboardSnapshot]:
        return self.dashboard.data

    def refresh(self) -> bool:
        return self.dashboard.load(self.patient_id)

    def set_patient_id(self, patient_id: str) -> bool:
        if patient_id == self.patient_id:
            return False
        self.patient_id = patient_id
        return self.refresh()


def history_frame(entries: List[HistoryEntry], tz=None) -> pd.DataFrame:
    """History rows keyed by the backend entry id."""
    rows = [
        {
            "id": e.id,
            "Medication": e.medication_id,
            "Scheduled": format_datetime(e.scheduled_time, tz),
            "Status": e.status,
        }
        for e in entries
    ]
    if not rows:
        return pd.DataFrame(columns=HISTORY_COLUMNS)
    return pd.DataFrame(rows).set_index("id")


def missed_lines(entries: List[HistoryEntry], tz=None) -> List[str]:
    return [f"**{e.medication_id}**  \n{format_datetime(e.scheduled_time, tz)}" for e in entries]


def alert_lines(alerts: List[InventoryAlert]) -> List[str]:
    return [
        f"**{a.name}** :red[**Low**]  \n{a.inventory_count} left (threshold {a.low_threshold})"
        for a in alerts
    ]


def _on_patient_change():
    view = st.session_state[STATE_KEY]
    view.pending = partial(view.set_patient_id, st.session_state[PATIENT_KEY])


def _on_refresh():
    view = st.session_state[STATE_KEY]
    view.pending = view.refresh


def _render_history(entries: List[HistoryEntry]):
    st.subheader("Medication History (30 days)")
    if not entries:
        st.caption(NO_HISTORY)
        return
    with st.container(height=384):
        for e in entries:
            name, badge = st.columns([3, 1])
            name.markdown(f"**{e.medication_id}**  \nScheduled: {format_datetime(e.scheduled_time)}")
            badge.markdown(status_badge(e.status))
    st.download_button(
        "Download history (CSV)",
        data=history_frame(entries).to_csv().encode("utf-8"),
        file_name="medication_history.csv",
        mime="text/csv",
    )


def _render_list(title: str, lines: List[str], empty_text: str):
    st.subheader(title)
    if not lines:
        st.caption(empty_text)
        return
    for line in lines:
        st.markdown(line)


def render(api: AdherenceApi, default_patient_id: str):
    view = st.session_state.get(STATE_KEY)
    if view is None:
        view = CaregiverDashboard(api, default_patient_id)
        st.session_state[STATE_KEY] = view
        st.session_state[PATIENT_KEY] = default_patient_id
        view.pending = view.refresh

    action, view.pending = view.pending, None
    if action is not None:
        with st.spinner("Loading..."):
            action()

    title, patient, refresh = st.columns([3, 2, 1], vertical_alignment="bottom")
    title.header("Caregiver Dashboard")
    patient.text_input("Patient ID", key=PATIENT_KEY, on_change=_on_patient_change)
    refresh.button("Refresh", on_click=_on_refresh, width="stretch")

    if view.dashboard.error:
        st.error(view.dashboard.error)

    snapshot = view.snapshot
    if snapshot is None:
        return

    wide, narrow = st.columns([2, 1], gap="large")
    with wide:
        with st.container(border=True):
            _render_history(snapshot.history)
    with narrow:
        with st.container(border=True):
            _render_list("Missed Doses (7 days)", missed_lines(snapshot.missed), NO_MISSED)
        with st.container(border=True):
            _render_list("Inventory Alerts", alert_lines(snapshot.inventory_alerts), NO_ALERTS)
