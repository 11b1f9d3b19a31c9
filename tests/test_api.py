"""
Tests for the HTTP API (TestClient, in-memory SQLite, mocked Gemini transport).
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from trader.config import Settings
from trader.main import create_app


def gemini_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={
        "candidates": [{
            "content": {"parts": [{"text": "Generated text"}]},
            "finishReason": "STOP",
            "groundingMetadata": {
                "groundingAttributions": [{"web": {"uri": "https://news.example/a", "title": "A"}}],
            },
        }],
    })


def overloaded_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(503)


def make_client(handler=gemini_handler, **overrides) -> TestClient:
    settings = Settings(**{
        "DATABASE_URL": "sqlite:///:memory:",
        "GEMINI_API_KEY": "",
        "GEMINI_RETRY_DELAYS": [0, 0],
        "SENTRY_DSN": "",
        **overrides,
    })
    return TestClient(create_app(settings, gemini_transport=httpx.MockTransport(handler)))


@pytest.fixture
def client():
    with make_client() as test_client:
        yield test_client


SAVE_BODY = {
    "team_a": "Arsenal",
    "team_b": "Chelsea",
    "profile_text": "Full match profile",
    "sources": [{"uri": "https://news.example/a", "title": "A"}],
    "inputs": {"team_a": "Arsenal", "team_b": "Chelsea"},
}


class TestHealthAndAnalysis:
    """Core routes."""

    def test_health(self, client):
        """Health reports whether a server-side key is set."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "gemini_configured": False}

    def test_empty_analysis(self, client):
        """An empty payload still returns every section."""
        response = client.post("/analysis", json={})
        assert response.status_code == 200
        data = response.json()
        assert data["flags"] == []
        assert len(data["segments"]) == 18
        assert data["league"]["team_count"] == 0
        assert data["volatility"]["home"]["insufficient_data"] is True
        assert "DERIVED STATS:" in data["raw_data"]

    def test_full_analysis(self, client, full_inputs):
        """Parsed values are serialised for the charts."""
        response = client.post("/analysis", json=full_inputs.model_dump())
        data = response.json()
        assert response.status_code == 200
        assert data["teams"] == {"home": "Arsenal", "away": "Chelsea"}
        assert data["index"]["found"] == ["Defence", "Goal Edge", "H v A", "Offence"]
        assert data["late_goals"]["home"] == {"scored": 3.0, "conceded": 1.0}
        assert data["timeline"][-1]["window"] == "76-90"
        assert data["flags"][0]["id"] == "fts-htc"
        assert data["ppg"]["chart_data"][0]["name"] == "Arsenal"

    def test_thresholds_from_settings(self, full_inputs):
        """Flag thresholds follow the app settings."""
        with make_client(FLAG_FTS_THRESHOLD=90.0) as client:
            data = client.post("/analysis", json=full_inputs.model_dump()).json()
        assert "fts-htc" not in [flag["id"] for flag in data["flags"]]


class TestGeneration:
    """Gemini-backed endpoints."""

    def test_generate_profile(self, client, full_inputs):
        """Profile, team news and analysis come back together."""
        response = client.post(
            "/profiles/generate",
            json={"inputs": full_inputs.model_dump(), "api_key": "request-key"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["profile"] == {
            "text": "Generated text",
            "sources": [{"uri": "https://news.example/a", "title": "A"}],
        }
        assert data["team_news"]["text"] == "Generated text"
        assert data["analysis"]["flags"]
        assert "ANALYTICAL FLAGS:" in data["raw_data"]

    def test_generate_reports_missing_inputs(self, client):
        """Every validation error is reported at once."""
        response = client.post("/profiles/generate", json={"inputs": {}})
        assert response.status_code == 400
        detail = response.json()["detail"]
        assert "Both team names are required" in detail
        assert "API key is required" in detail

    def test_settings_key_is_used(self, full_inputs):
        """GEMINI_API_KEY is used when the request has no key."""
        with make_client(GEMINI_API_KEY="server-key") as client:
            response = client.post("/profiles/generate", json={"inputs": full_inputs.model_dump()})
        assert response.status_code == 200

    def test_overloaded_maps_to_503(self, full_inputs):
        """An overloaded model surfaces as 503."""
        with make_client(overloaded_handler) as client:
            response = client.post(
                "/profiles/generate",
                json={"inputs": full_inputs.model_dump(), "api_key": "k"},
            )
        assert response.status_code == 503

    def test_follow_up(self, client):
        """Follow-up answers return the generated text."""
        response = client.post("/profiles/follow-up", json={
            "question": "Over 2.5?",
            "profile_text": "Profile",
            "raw_data": "RAW",
            "api_key": "k",
        })
        assert response.status_code == 200
        assert response.json()["text"] == "Generated text"

    def test_follow_up_without_key(self, client):
        """No key anywhere is a 400."""
        response = client.post("/profiles/follow-up", json={"question": "Q", "profile_text": "P"})
        assert response.status_code == 400
        assert response.json()["detail"] == "API key is required"

    def test_key_content_unknown_kind(self, client):
        """Unknown content kinds are rejected."""
        response = client.post("/profiles/key-content", json={
            "kind": "poems",
            "profile_text": "Profile",
            "api_key": "k",
        })
        assert response.status_code == 400

    def test_key_content(self, client):
        """Key learnings return the generated text."""
        response = client.post("/profiles/key-content", json={
            "kind": "learnings",
            "profile_text": "Profile",
            "raw_data": "RAW",
            "api_key": "k",
        })
        assert response.status_code == 200
        assert response.json()["text"] == "Generated text"


class TestSavedProfiles:
    """Save, list, get and delete sessions."""

    def test_crud(self, client):
        """A saved profile can be listed, fetched and deleted."""
        created = client.post("/profiles", json=SAVE_BODY)
        assert created.status_code == 201
        profile = created.json()
        assert profile["kind"] == "match_profile"
        assert profile["version"] == 1

        listed = client.get("/profiles").json()
        assert [p["id"] for p in listed] == [profile["id"]]
        assert listed[0]["team_a"] == "Arsenal"

        fetched = client.get(f"/profiles/{profile['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["profile_text"] == "Full match profile"

        assert client.delete(f"/profiles/{profile['id']}").status_code == 204
        assert client.get(f"/profiles/{profile['id']}").status_code == 404
        assert client.get("/profiles").json() == []

    def test_missing_profile(self, client):
        """Unknown ids are 404."""
        assert client.get("/profiles/nope").status_code == 404
        assert client.delete("/profiles/nope").status_code == 404

    def test_rejects_empty_fields(self, client):
        """Blank profile text fails validation."""
        response = client.post("/profiles", json={**SAVE_BODY, "profile_text": ""})
        assert response.status_code == 422

    def test_rejects_unknown_input_fields(self, client):
        """Unknown input fields fail validation."""
        body = {**SAVE_BODY, "inputs": {"team_a": "Arsenal", "shoe_size": 11}}
        assert client.post("/profiles", json=body).status_code == 422
