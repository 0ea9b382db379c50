# medicare/services/api.py
import logging
from typing import Optional

import requests
from pydantic import ValidationError

from medicare.schemas import DailyStatus, DashboardSnapshot, DoseConfirmation, DoseItem
from medicare.settings import Settings

log = logging.getLogger(__name__)

STATUS_FAILED = "Failed to fetch status"
CONFIRM_FAILED = "Failed to confirm dose"
DASHBOARD_FAILED = "Failed to load dashboard"


class RequestFailed(Exception):
    """Any unsuccessful call to the adherence API: non-2xx, transport error or bad body."""


class AdherenceApi:
    """
    Thin client for the adherence backend.
    Every failure is reported as RequestFailed carrying a user-facing message;
    the underlying cause is logged and chained.
    """

    def __init__(self, base_url: str, timeout: float = 30.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings, session: Optional[requests.Session] = None):
        return cls(settings.api_base, timeout=settings.request_timeout, session=session)

    def _request(self, method: str, path: str, failure: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        log.debug("%s %s", method, url)
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            log.warning("%s %s failed: %s", method, url, e)
            raise RequestFailed(failure) from e
        if not resp.ok:
            log.warning("%s %s returned %s", method, url, resp.status_code)
            raise RequestFailed(failure)
        return resp

    def _decode(self, resp: requests.Response, model, failure: str):
        try:
            return model.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            log.warning("Unexpected response body from %s: %s", resp.url, e)
            raise RequestFailed(failure) from e

    def get_today_status(self, user_id: str) -> DailyStatus:
        resp = self._request("GET", "/api/senior/today", STATUS_FAILED, params={"user_id": user_id})
        return self._decode(resp, DailyStatus, STATUS_FAILED)

    def confirm_dose(self, user_id: str, dose: DoseItem) -> None:
        body = DoseConfirmation(
            user_id=user_id,
            medication_id=dose.medication_id,
            scheduled_time_iso=dose.scheduled_time,
        )
        self._request("POST", "/api/senior/confirm", CONFIRM_FAILED, json=body.model_dump())

    def get_dashboard(self, patient_id: str) -> DashboardSnapshot:
        resp = self._request("GET", "/api/caregiver/dashboard", DASHBOARD_FAILED, params={"patient_id": patient_id})
        return self._decode(resp, DashboardSnapshot, DASHBOARD_FAILED)
