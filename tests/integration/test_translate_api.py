from pulseboard_router.core.fallback import MISSING_KEY_TRANSLATION


def test_translate_with_camel_case_fields(api, hub):
    hub.on("Helsinki-NLP/opus-mt-en-fr", [{"translation_text": "Bonjour le monde"}])

    r = api.post("/api/translate", json={"text": "Hello world", "sourceLang": "English", "targetLang": "French"})

    assert r.status_code == 200
    body = r.json()
    assert body["translation"] == "Bonjour le monde"
    assert body["model_used"] == "Helsinki-NLP/opus-mt-en-fr"
    assert "error" not in body


def test_translate_missing_fields_is_400(api, hub):
    r = api.post("/api/translate", json={"text": "Hello", "sourceLang": "English"})

    assert r.status_code == 400
    assert r.json()["error"] == "Text, source language, and target language are required"
    assert hub.calls == []


def test_translate_is_total_when_models_fail(api):
    r = api.post("/api/translate", json={"text": "Hello", "sourceLang": "Tamil", "targetLang": "English"})

    assert r.status_code == 200
    body = r.json()
    assert body["translation"].startswith("Translation not available for Tamil to English")
    assert body["specialized"] is True
    assert body["models_tried"][0] == "Helsinki-NLP/opus-mt-ta-en"


def test_translate_without_key(api_no_key):
    r = api_no_key.post("/api/translate", json={"text": "Hello", "sourceLang": "en", "targetLang": "es"})

    assert r.status_code == 200
    assert r.json()["translation"] == MISSING_KEY_TRANSLATION
    assert r.json()["mockData"] is True
