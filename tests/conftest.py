# tests/conftest.py
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

# ---------- Paths & .env ----------
ROOT = Path(__file__).resolve().parents[1]  # repo root
try:
    from dotenv import load_dotenv  # type: ignore
    env_path = ROOT / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)
except ImportError:
    pass

from pulseboard_backend.app.deps import get_inference_client  # noqa: E402
from pulseboard_backend.app.main import app  # noqa: E402
from pulseboard_router.adapters.huggingface import InferenceClient  # noqa: E402

HF_LIVE = bool((os.getenv("HUGGINGFACE_API_KEY") or "").strip())

BASE_URL = "https://hf.test/models"


# ---------- Pytest controls ----------
def pytest_collection_modifyitems(config: pytest.Config, items: List[pytest.Item]) -> None:
    """Gate @hf_live tests on HUGGINGFACE_API_KEY."""
    if HF_LIVE:
        return
    skip_live = pytest.mark.skip(reason="HUGGINGFACE_API_KEY not set; skipping hosted-inference tests")
    for item in items:
        if "hf_live" in item.keywords:
            item.add_marker(skip_live)


# ---------- Fake hosted inference ----------
class FakeHub:
    """
    Routes POST <BASE_URL>/<model> to per-model handlers and records calls.

    A handler is either a JSON-able value (200 body), an int (status code),
    an Exception instance (raised as a transport error), or a callable
    taking the decoded request payload.
    """

    def __init__(self) -> None:
        self.responses: Dict[str, Any] = {}
        self.calls: List[Dict[str, Any]] = []

    def on(self, model: str, response: Any) -> "FakeHub":
        self.responses[model] = response
        return self

    @property
    def models_called(self) -> List[str]:
        return [c["model"] for c in self.calls]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        model = request.url.path.split("/models/", 1)[-1]
        payload = json.loads(request.content) if request.content else {}
        self.calls.append({"model": model, "method": request.method, "payload": payload})

        response = self.responses.get(model, 503)
        if callable(response) and not isinstance(response, Exception):
            response = response(payload)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, int):
            return httpx.Response(response, text="unavailable", request=request)
        return httpx.Response(200, json=response, request=request)


@pytest.fixture
def hub() -> FakeHub:
    return FakeHub()


@pytest.fixture
def hf_client(hub: FakeHub) -> InferenceClient:
    return InferenceClient("hf_test_key_1234567890", BASE_URL, transport=httpx.MockTransport(hub))


@pytest.fixture
def unconfigured_client(hub: FakeHub) -> InferenceClient:
    return InferenceClient("", BASE_URL, transport=httpx.MockTransport(hub))


# ---------- App clients ----------
@pytest.fixture
def client_factory() -> Callable[[InferenceClient], TestClient]:
    def make(inference: InferenceClient) -> TestClient:
        app.dependency_overrides[get_inference_client] = lambda: inference
        return TestClient(app, raise_server_exceptions=False)

    yield make
    app.dependency_overrides.clear()


@pytest.fixture
def api(client_factory, hf_client) -> TestClient:
    """App client wired to the fake hub with a configured key."""
    return client_factory(hf_client)


@pytest.fixture
def api_no_key(client_factory, unconfigured_client) -> TestClient:
    """App client with no inference key."""
    return client_factory(unconfigured_client)
