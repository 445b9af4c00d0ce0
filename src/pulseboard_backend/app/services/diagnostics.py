# src/pulseboard_backend/app/services/diagnostics.py
from __future__ import annotations

import os
import platform
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pulseboard_router.adapters.huggingface import InferenceClient, InferenceError
from pulseboard_router.core.config import section

PROBE_INPUT = (
    "Hello, this is a test message to check if the Hugging Face API is working "
    "properly. Please summarize this text."
)


def mask_key(key: str) -> str:
    """First and last five characters only."""
    if not key:
        return "Not set"
    return f"{key[:5]}...{key[-5:]}"


def environment_info(client: InferenceClient, now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)
    return {
        "huggingfaceApiKey": mask_key(client.api_key),
        "huggingfaceApiKeyLength": len(client.api_key),
        "pythonVersion": platform.python_version(),
        "environment": os.getenv("APP_ENV", "development"),
        "timeChecked": now.isoformat(),
    }


async def debug_report(client: InferenceClient) -> Dict[str, Any]:
    """
    Masked key, interpreter, environment, and a reachability check of the
    default summarization model. A reachable model also gets a tiny test call.
    """
    model = section("summarization").get("default_model", "facebook/bart-large-cnn")
    status = "Unchecked"
    model_info: Any = None

    if client.configured:
        status = await client.probe(model)
        if status == "Accessible":
            try:
                model_info = await client.run(
                    model,
                    PROBE_INPUT,
                    parameters={"max_length": 30, "min_length": 10},
                    timeout=15.0,
                )
            except InferenceError as ex:
                model_info = {"error": str(ex)}

    return {
        "status": "success",
        "message": "Debug information for Hugging Face API",
        "environmentInfo": environment_info(client),
        "huggingFaceStatus": status,
        "modelInfo": model_info,
    }
