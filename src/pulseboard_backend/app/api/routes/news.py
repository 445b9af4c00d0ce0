from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from pulseboard_backend.app.services.news import NewsError, fetch_headlines, news_api_key

router = APIRouter(prefix="/api", tags=["news"])


@router.get("/news")
async def news(
    category: str = Query("general", description="NewsAPI category"),
    country: str = Query("us", description="Two-letter country code"),
) -> Any:
    api_key = news_api_key()
    if not api_key:
        return JSONResponse(
            status_code=400,
            content={
                "error": "API key not configured",
                "message": "News API key is not configured. Please add your NEWS_API_KEY to the .env file.",
            },
        )

    try:
        return await fetch_headlines(category=category, country=country, api_key=api_key)
    except NewsError as ex:
        return JSONResponse(
            status_code=ex.status_code,
            content={"error": ex.error, "message": ex.message},
        )
