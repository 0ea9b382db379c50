# medicare/views/senior.py
import logging
from functools import partial
from typing import Callable, Optional

import streamlit as st

from medicare.services.api import AdherenceApi, RequestFailed
from medicare.services.doses import format_time, format_today, next_pending_dose
from medicare.services.resource import Resource

log = logging.getLogger(__name__)

STATE_KEY = "senior_view"
PATIENT_KEY = "senior_patient_id"


class SeniorDashboard:
    """Today's doses for one patient and the confirm action."""

    def __init__(self, api: AdherenceApi, patient_id: str):
        self.api = api
        self.patient_id = patient_id
        self.status = Resource(api.get_today_status, name="daily status")
        # patient the current status snapshot was fetched for
        self.loaded_for: Optional[str] = None
        # queued by widget callbacks, run by render() under a spinner
        self.pending: Optional[Callable[[], bool]] = None

    @property
    def next_dose(self):
        # a stale snapshot from another patient is shown but never confirmable
        if self.loaded_for != self.patient_id:
            return None
        return next_pending_dose(self.status.data)

    def load(self) -> bool:
        patient_id = self.patient_id
        if not self.status.load(patient_id):
            return False
        self.loaded_for = patient_id
        return True

    def set_patient_id(self, patient_id: str) -> bool:
        if patient_id == self.patient_id:
            return False
        self.patient_id = patient_id
        return self.load()

    def confirm(self) -> bool:
        """
        Confirm the next pending dose, then reload today's status once.
        Does nothing when every dose is already taken.
        """
        dose = self.next_dose
        if dose is None:
            return False
        token = self.status.begin()
        try:
            self.api.confirm_dose(self.patient_id, dose)
        except RequestFailed as e:
            self.status.fail(token, str(e))
            return False
        log.info("Confirmed %s at %s for %s", dose.medication_id, dose.scheduled_time, self.patient_id)
        self.load()
        return True


def _on_patient_change():
    view = st.session_state[STATE_KEY]
    view.pending = partial(view.set_patient_id, st.session_state[PATIENT_KEY])


def _on_confirm():
    view = st.session_state[STATE_KEY]
    view.pending = view.confirm


def render(api: AdherenceApi, default_patient_id: str):
    view = st.session_state.get(STATE_KEY)
    if view is None:
        view = SeniorDashboard(api, default_patient_id)
        st.session_state[STATE_KEY] = view
        st.session_state[PATIENT_KEY] = default_patient_id
        view.pending = view.load

    _, middle, _ = st.columns([1, 2, 1])
    with middle:
        action, view.pending = view.pending, None
        if action is not None:
            with st.spinner("Loading..."):
                action()

        st.header("Today's Medication Status")
        st.caption(format_today())

        if view.status.error:
            st.error(view.status.error)

        with st.container(border=True):
            data = view.status.data
            taken = data.taken if data else 0
            total = data.total_doses if data else 0
            left, right = st.columns(2)
            left.markdown("### Taken")
            right.markdown(f"### {taken}/{total}")

            nxt = view.next_dose
            st.button(
                "Confirm",
                type="primary",
                width="stretch",
                disabled=nxt is None,
                on_click=_on_confirm,
            )
            if nxt:
                st.caption(f"Next dose scheduled at {format_time(nxt.scheduled_time)}")
            elif data and view.loaded_for != view.patient_id:
                st.caption(f"Showing last status loaded for {view.loaded_for}")
            else:
                st.caption("All doses confirmed for today")

        st.text_input("Patient ID", key=PATIENT_KEY, on_change=_on_patient_change)
