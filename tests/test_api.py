from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from wordday.catalog import FALLBACK_WORDS
from wordday.main import app, get_repository, get_resolver, today

from conftest import make_record


@pytest.fixture
def repo():
    r = AsyncMock()
    r.check_connection.return_value = True
    r.get_by_date.return_value = None
    r.search.return_value = []
    r.get_recent.return_value = []
    return r


@pytest.fixture
def resolver():
    return SimpleNamespace(resolve=AsyncMock(side_effect=lambda ymd: make_record(date=ymd, source="curated")))


@pytest.fixture
def client(repo, resolver):
    """Test client with repository and resolver overridden."""
    app.dependency_overrides[get_repository] = lambda: repo
    app.dependency_overrides[get_resolver] = lambda: resolver
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


# ───────── word for date ─────────

def test_word_for_date_returns_resolved_record(client, resolver):
    r = client.get("/api/word/2025-06-15")
    assert r.status_code == 200
    body = r.json()
    assert body["date"] == "2025-06-15"
    assert body["word"] == "eloquent"
    assert body["source"] == "curated"
    assert isinstance(body["examples"], list) and body["examples"]
    resolver.resolve.assert_awaited_once_with("2025-06-15")


@pytest.mark.parametrize("bad", ["2025-6-15", "20250615", "2025-06-15x", "yesterday", "2025-o6-15"])
def test_word_for_date_rejects_malformed_dates(client, resolver, bad):
    r = client.get(f"/api/word/{bad}")
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid date format. Use YYYY-MM-DD"
    resolver.resolve.assert_not_awaited()


def test_odd_but_well_formed_date_is_accepted(client, resolver):
    r = client.get("/api/word/0000-00-00")
    assert r.status_code == 200
    resolver.resolve.assert_awaited_once_with("0000-00-00")


def test_word_of_the_day_uses_today(client, resolver):
    before = today()
    r = client.get("/api/word-of-the-day")
    after = today()
    assert r.status_code == 200
    ymd = resolver.resolve.await_args.args[0]
    assert ymd in (before, after)
    assert r.json()["date"] == ymd


# ───────── database status ─────────

def test_database_status_connected_with_data(client, repo):
    repo.get_by_date.return_value = make_record(date="2024-01-01")
    r = client.get("/api/database-status")
    assert r.json() == {
        "status": "connected",
        "connection": True,
        "hasData": True,
        "message": "Database is connected and accessible",
    }
    repo.get_by_date.assert_awaited_once_with("2024-01-01")


def test_database_status_connected_without_data(client, repo):
    body = client.get("/api/database-status").json()
    assert body["status"] == "connected"
    assert body["hasData"] is False


def test_database_status_disconnected(client, repo):
    repo.check_connection.return_value = False
    body = client.get("/api/database-status").json()
    assert body == {
        "status": "disconnected",
        "connection": False,
        "hasData": False,
        "message": "Database connection failed",
    }


def test_database_status_error(client, repo):
    repo.check_connection.side_effect = RuntimeError("pool exhausted")
    body = client.get("/api/database-status").json()
    assert body["status"] == "error"
    assert body["connection"] is False
    assert body["message"] == "pool exhausted"


# ───────── search ─────────

@pytest.mark.parametrize("q", ["", "e", "  e  "])
def test_search_rejects_short_queries(client, repo, q):
    r = client.get("/api/words/search", params={"q": q})
    assert r.status_code == 400
    repo.search.assert_not_awaited()


def test_search_without_query_is_rejected(client):
    assert client.get("/api/words/search").status_code == 400


def test_search_returns_store_matches(client, repo):
    repo.search.return_value = [make_record(), make_record(date="2024-02-03", word="Eloquence")]
    r = client.get("/api/words/search", params={"q": " eloq "})
    assert r.status_code == 200
    assert [w["word"] for w in r.json()] == ["eloquent", "Eloquence"]
    repo.search.assert_awaited_once_with("eloq")


def test_search_falls_back_to_offline_list_when_store_has_nothing(client, repo):
    r = client.get("/api/words/search", params={"q": "ELOQ"})
    assert r.status_code == 200
    assert [w["word"] for w in r.json()] == ["eloquent"]


def test_search_offline_when_disconnected(client, repo):
    repo.check_connection.return_value = False
    r = client.get("/api/words/search", params={"q": "eloq"})
    assert [w["word"] for w in r.json()] == ["eloquent"]
    repo.search.assert_not_awaited()


# ───────── history ─────────

def test_history_defaults_to_thirty_days(client, repo):
    repo.get_recent.return_value = [make_record()]
    r = client.get("/api/words/history")
    assert r.status_code == 200
    assert len(r.json()) == 1
    repo.get_recent.assert_awaited_once_with(30)


@pytest.mark.parametrize("days, expected", [(100, 60), (60, 60), (7, 7), (-5, 0)])
def test_history_days_are_clamped(client, repo, days, expected):
    repo.get_recent.return_value = [make_record()]
    client.get("/api/words/history", params={"days": days})
    repo.get_recent.assert_awaited_once_with(expected)


def test_history_offline_when_disconnected(client, repo):
    repo.check_connection.return_value = False
    body = client.get("/api/words/history").json()
    assert [w["word"] for w in body] == [t.word for t in FALLBACK_WORDS]
    repo.get_recent.assert_not_awaited()


def test_history_empty_store_uses_offline_list(client, repo):
    body = client.get("/api/words/history", params={"days": 2}).json()
    assert [w["word"] for w in body] == ["serendipity", "procrastinate"]


# ───────── real wiring, nothing configured ─────────

def test_unconfigured_service_serves_offline_words(monkeypatch):
    from wordday.main import settings

    monkeypatch.setattr(settings, "DATABASE_URL", None)
    monkeypatch.setattr(settings, "HUGGINGFACE_API_KEY", None)
    monkeypatch.setattr(settings, "LOG_FILE", None)

    with TestClient(app) as c:
        assert app.state.session_factory is None

        status = c.get("/api/database-status").json()
        assert status["status"] == "disconnected"

        word = c.get("/api/word/2024-01-05").json()
        assert word["source"] == "database_unavailable"
        assert word["word"] == FALLBACK_WORDS[(2024 + 1 + 5) % len(FALLBACK_WORDS)].word

        assert [w["word"] for w in c.get("/api/words/search", params={"q": "eloq"}).json()] == ["eloquent"]
