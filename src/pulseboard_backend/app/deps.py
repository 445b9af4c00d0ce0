# src/pulseboard_backend/app/deps.py
from __future__ import annotations

from pulseboard_router.adapters.huggingface import InferenceClient


def get_inference_client() -> InferenceClient:
    """
    FastAPI dependency: a client bound to the current HUGGINGFACE_API_KEY.
    Tests swap it via app.dependency_overrides.
    """
    return InferenceClient.from_env()
