import json

import pytest
import requests

from medicare.services.api import AdherenceApi

BASE = "http://backend.test"


def make_response(status_code=200, body=None, url=BASE):
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = url
    if isinstance(body, (bytes, str)):
        resp._content = body.encode("utf-8") if isinstance(body, str) else body
    else:
        resp._content = json.dumps(body if body is not None else {}).encode("utf-8")
    resp.headers["Content-Type"] = "application/json"
    return resp


class FakeSession:
    """Stands in for requests.Session: records calls and replays queued outcomes."""

    def __init__(self):
        self.calls = []
        self.queue = []

    def reply(self, status_code=200, body=None):
        self.queue.append(make_response(status_code, body))
        return self

    def raise_error(self, exc):
        self.queue.append(exc)
        return self

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        outcome = self.queue.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        outcome.url = url
        return outcome


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def api(session):
    return AdherenceApi(BASE + "/", timeout=5, session=session)


@pytest.fixture
def example_status():
    return {
        "taken": 1,
        "total_doses": 3,
        "items": [
            {"medication_id": "A", "scheduled_time": "2024-01-01T08:00:00Z", "status": "taken"},
            {"medication_id": "B", "scheduled_time": "2024-01-01T20:00:00Z", "status": "pending"},
            {"medication_id": "C", "scheduled_time": "2024-01-01T12:00:00Z", "status": "pending"},
        ],
    }


@pytest.fixture
def example_dashboard():
    return {
        "history": [
            {"id": 1, "medication_id": "A", "scheduled_time": "2024-01-01T08:00:00Z", "status": "taken"},
            {"id": 2, "medication_id": "B", "scheduled_time": None, "status": "missed"},
        ],
        "missed": [
            {"id": 2, "medication_id": "B", "scheduled_time": None, "status": "missed"},
        ],
        "inventory_alerts": [
            {"medication_id": "A", "name": "Aspirin", "inventory_count": 3, "low_threshold": 5},
        ],
    }


class FakeBackend:
    """In-memory adherence API answering requests.Session.request for app-level tests."""

    def __init__(self, status, dashboard):
        self.status = status
        self.dashboard = dashboard
        self.calls = []
        self.fail_today = False

    def __call__(self, session, method, url, **kwargs):
        path = url.split("/api", 1)[1]
        self.calls.append((method, path, kwargs.get("params") or kwargs.get("json")))
        if path == "/senior/today":
            if self.fail_today:
                return make_response(500, {"detail": "down"}, url)
            return make_response(200, self.status, url)
        if path == "/senior/confirm":
            for item in self.status["items"]:
                if item["medication_id"] == kwargs["json"]["medication_id"]:
                    item["status"] = "taken"
                    self.status["taken"] += 1
            return make_response(200, {"ok": True}, url)
        if path == "/caregiver/dashboard":
            return make_response(200, self.dashboard, url)
        return make_response(404, {}, url)

    def paths(self):
        return [(method, path) for method, path, _ in self.calls]


@pytest.fixture
def backend(monkeypatch, example_status, example_dashboard):
    fake = FakeBackend(example_status, example_dashboard)
    monkeypatch.setattr(requests.Session, "request", lambda self, *args, **kwargs: fake(self, *args, **kwargs))
    return fake
