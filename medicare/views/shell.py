# medicare/views/shell.py
from typing import MutableMapping

from medicare.views import caregiver, senior

SENIOR = "senior"
CAREGIVER = "caregiver"
ROLES = {SENIOR: "Senior", CAREGIVER: "Caregiver"}

ROLE_KEY = "role"

# session keys owned by each role's view
VIEW_KEYS = {
    SENIOR: (senior.STATE_KEY, senior.PATIENT_KEY),
    CAREGIVER: (caregiver.STATE_KEY, caregiver.PATIENT_KEY),
}


def active_role(state: MutableMapping) -> str:
    return state.get(ROLE_KEY, SENIOR)


def discard_inactive_views(state: MutableMapping):
    """
    Drop every view except the active one, so switching back to a role
    mounts its view fresh and fetches again.
    """
    role = active_role(state)
    for other, keys in VIEW_KEYS.items():
        if other == role:
            continue
        for key in keys:
            state.pop(key, None)
