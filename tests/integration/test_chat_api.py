from unittest.mock import AsyncMock, patch

from pulseboard_router.core.fallback import MISSING_KEY_REPLY


def test_healthz(api):
    r = api.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_hello_round_trip(api, hub):
    r = api.post("/api/chat", json={"message": "Hello"})

    assert r.status_code == 200
    body = r.json()
    assert body["response"] == "Hello! How can I assist you today?"
    assert body["context"]["message_count"] == 1
    assert body["detected_command"] is None
    assert hub.calls == []


def test_context_is_carried_between_turns(api):
    first = api.post("/api/chat", json={"message": "Tell me a joke"}).json()
    assert first["detected_command"] == "joke"

    second = api.post(
        "/api/chat",
        json={"message": "What's the weather in Paris?", "context": first["context"]},
    ).json()

    assert second["context"]["message_count"] == 2
    assert second["context"]["last_command"] == "weather"
    assert second["command_params"] == ["Paris"]


def test_missing_message_is_400(api):
    r = api.post("/api/chat", json={"history": []})

    assert r.status_code == 400
    assert r.json() == {"error": "Message is required", "response": "Error: No message provided."}


def test_missing_key_still_200(api_no_key):
    r = api_no_key.post("/api/chat", json={"message": "Explain bond yields"})

    assert r.status_code == 200
    body = r.json()
    assert body["response"] == MISSING_KEY_REPLY
    assert body["error"] == "API key not configured"


def test_generation_failure_still_answers(api, hub):
    hub.on("google/flan-t5-xl", 500).on("facebook/bart-large", 500)

    r = api.post("/api/chat", json={"message": "Explain bond yields"})

    assert r.status_code == 200
    assert r.json()["model_used"] == "fallback"
    assert r.json()["response"]


def test_unexpected_error_becomes_500_json(api):
    with patch(
        "pulseboard_backend.app.api.routes.chat.handle_message",
        new=AsyncMock(side_effect=RuntimeError("boom")),
    ):
        r = api.post("/api/chat", json={"message": "anything"})

    assert r.status_code == 500
    assert r.json()["error"] == "Internal server error"
    assert "boom" not in r.text


def test_cors_preflight_for_dashboard(api):
    r = api.options(
        "/api/chat",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "http://localhost:3000"
