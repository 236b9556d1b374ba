from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from conftest import OWNER_PASSWORD, login
from quizroom.services.questions import QuestionRepository
from quizroom.services.statistics import StatisticsAggregator


def storage_down(*args, **kwargs):
    raise OperationalError("SELECT", {}, Exception("database is locked"))


def test_health(client, settings):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "healthy", "version": settings.APP_VERSION, "environment": "testing"}


def test_statistics_storage_failure_is_503(client, owner_headers, monkeypatch):
    monkeypatch.setattr(StatisticsAggregator, "collect", storage_down)
    r = client.get("/statistics", headers=owner_headers)
    assert r.status_code == 503
    assert r.json() == {"error": {
        "message": "Failed to fetch statistics", "type": "unavailable", "status_code": 503,
    }}


def test_storage_failure_on_other_routes_is_503(client, owner_headers, monkeypatch):
    monkeypatch.setattr(QuestionRepository, "list", storage_down)
    r = client.get("/questions", headers=owner_headers)
    assert r.status_code == 503
    assert r.json() == {"error": {
        "message": "Storage is unavailable", "type": "unavailable", "status_code": 503,
    }}


def test_unexpected_error_is_generic_500(app, monkeypatch):
    def broken(self):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(QuestionRepository, "list", broken)
    with TestClient(app, raise_server_exceptions=False) as c:
        headers = login(c, "xasan", OWNER_PASSWORD)
        r = c.get("/questions", headers=headers)
    assert r.status_code == 500
    assert r.json()["error"] == {
        "message": "An internal error occurred", "type": "internal_error", "status_code": 500,
    }
