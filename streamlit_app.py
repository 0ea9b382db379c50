# streamlit_app.py
import logging

import streamlit as st

from medicare.services.api import AdherenceApi
from medicare.settings import get_settings
from medicare.views import caregiver, senior
from medicare.views.shell import CAREGIVER, ROLE_KEY, ROLES, SENIOR, active_role, discard_inactive_views

settings = get_settings()
logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(page_title="MediCare Network", layout="wide")

# One HTTP session per browser session
if "api" not in st.session_state:
    st.session_state["api"] = AdherenceApi.from_settings(settings)
api = st.session_state["api"]
if ROLE_KEY not in st.session_state:
    st.session_state[ROLE_KEY] = SENIOR


def _on_role_change():
    discard_inactive_views(st.session_state)


brand, switcher = st.columns([3, 1], vertical_alignment="center")
brand.markdown("### MediCare Network")
switcher.radio(
    "Role",
    options=list(ROLES),
    format_func=ROLES.get,
    key=ROLE_KEY,
    horizontal=True,
    on_change=_on_role_change,
    label_visibility="collapsed",
)
st.divider()

if active_role(st.session_state) == CAREGIVER:
    caregiver.render(api, settings.default_patient_id)
else:
    senior.render(api, settings.default_patient_id)
