# src/pulseboard_backend/app/services/news.py
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

NEWS_API_URL = "https://newsapi.org/v2/top-headlines"


class NewsError(RuntimeError):
    """Provider failure already translated into a user-facing message."""

    def __init__(self, status_code: int, error: str, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.message = message


def news_api_key() -> str:
    return (os.getenv("NEWS_API_KEY", "") or "").strip()


async def fetch_headlines(
    category: str = "general",
    country: str = "us",
    api_key: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout: float = 15.0,
) -> Dict[str, Any]:
    """
    Proxy NewsAPI top-headlines. The provider body is returned unchanged
    ({status, totalResults, articles[]}).
    """
    api_key = api_key if api_key is not None else news_api_key()
    params = {"country": country, "category": category, "apiKey": api_key}
    logger.info("fetching news category=%s country=%s", category, country)

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            resp = await client.get(NEWS_API_URL, params=params)
    except httpx.HTTPError as ex:
        logger.error("News API transport error: %r", ex)
        raise NewsError(
            502,
            "Failed to fetch news",
            "An error occurred while fetching news. Please try again later.",
        ) from ex

    if resp.status_code == 401:
        raise NewsError(
            401,
            "Invalid API key",
            "Your News API key is invalid or expired. Please check your API key.",
        )
    if resp.status_code == 429:
        raise NewsError(
            429,
            "Rate limit exceeded",
            "You have exceeded the rate limit for the News API. Please try again later.",
        )
    if resp.status_code >= 300:
        logger.error("News API error %s: %s", resp.status_code, resp.text[:400])
        raise NewsError(
            502,
            "Failed to fetch news",
            "An error occurred while fetching news. Please try again later.",
        )

    try:
        data = resp.json()
    except ValueError as ex:
        raise NewsError(
            502,
            "Failed to fetch news",
            "The news provider returned an unreadable response.",
        ) from ex

    logger.info("retrieved %d articles from News API", len(data.get("articles") or []))
    return data
