# src/pulseboard_router/adapters/huggingface.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from pulseboard_router.core.config import inference_api_key, inference_base_url

logger = logging.getLogger(__name__)


class InferenceError(RuntimeError):
    """
    Any failed hosted-inference call: network error, timeout,
    non-2xx status, or a body that is not JSON.
    """

    def __init__(self, model: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"[{model}] {message}")
        self.model = model
        self.status_code = status_code


class InferenceClient:
    """
    Thin async client for the hosted-inference API.

    POST <base_url>/<model>  {"inputs": ..., "parameters": {...}}
    Authorization: Bearer <api_key>

    `transport` is passed straight to httpx.AsyncClient (tests use
    httpx.MockTransport).
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api-inference.huggingface.co/models",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key or ""
        self.base_url = base_url.rstrip("/")
        self.transport = transport

    @classmethod
    def from_env(cls, transport: Optional[httpx.AsyncBaseTransport] = None) -> "InferenceClient":
        return cls(
            api_key=inference_api_key(),
            base_url=inference_base_url(),
            transport=transport,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout, transport=self.transport)

    async def run(
        self,
        model: str,
        inputs: Any,
        parameters: Optional[Dict[str, Any]] = None,
        timeout: float = 30.0,
    ) -> Any:
        """
        Call one model and return its decoded JSON body.
        Raises InferenceError on any failure; callers decide how to fall back.
        """
        url = f"{self.base_url}/{model}"
        payload: Dict[str, Any] = {"inputs": inputs}
        if parameters:
            payload["parameters"] = parameters

        try:
            async with self._client(timeout) as client:
                resp = await client.post(url, headers=self._headers(), json=payload)
        except httpx.TimeoutException as ex:
            raise InferenceError(model, f"timed out after {timeout}s") from ex
        except httpx.HTTPError as ex:
            raise InferenceError(model, f"transport error: {ex!r}") from ex

        if resp.status_code >= 300:
            raise InferenceError(
                model,
                f"HTTP {resp.status_code}: {resp.text[:400]}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as ex:
            raise InferenceError(model, f"non-JSON body: {resp.text[:400]}") from ex

    async def probe(self, model: str, timeout: float = 10.0) -> str:
        """HEAD the model endpoint; used by the diagnostics route."""
        try:
            async with self._client(timeout) as client:
                resp = await client.head(f"{self.base_url}/{model}", headers=self._headers())
        except httpx.HTTPError as ex:
            return f"Error checking API: {ex!r}"
        if resp.is_success:
            return "Accessible"
        return f"Error: {resp.status_code} {resp.reason_phrase}"


def first_text(data: Any, *fields: str) -> str:
    """
    Defensive unwrap of inference responses.

    Model families answer either with a list of objects
    ([{"generated_text": "..."}]) or with a single object; some return a bare
    string. Returns the first non-empty string found under `fields`, else "".
    """
    if isinstance(data, str):
        return data.strip()

    if isinstance(data, list):
        if not data:
            return ""
        data = data[0]

    if not isinstance(data, dict):
        return ""

    for field in fields:
        value = data.get(field)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""
