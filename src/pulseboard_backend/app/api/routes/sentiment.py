from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from pulseboard_backend.app.deps import get_inference_client
from pulseboard_backend.app.services.sentiment import analyze_sentiment
from pulseboard_router.adapters.huggingface import InferenceClient, InferenceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["sentiment"])


class SentimentRequest(BaseModel):
    text: Optional[str] = None


@router.post("/sentiment")
async def sentiment(
    req: SentimentRequest,
    client: InferenceClient = Depends(get_inference_client),
) -> Any:
    """Score text on [-1, 1]."""
    if not client.configured:
        return JSONResponse(
            status_code=400,
            content={
                "error": "API key not configured",
                "message": "Hugging Face API key is not configured. Please add your HUGGINGFACE_API_KEY to the .env file.",
            },
        )
    if not req.text or not req.text.strip():
        return JSONResponse(
            status_code=400,
            content={"error": "Text is required", "sentiment": 0, "confidence": 0},
        )

    try:
        return await analyze_sentiment(req.text, client)
    except InferenceError as ex:
        logger.error("sentiment analysis failed: %s", ex)
        return JSONResponse(
            status_code=502,
            content={"error": "Failed to analyze sentiment", "sentiment": 0, "confidence": 0, "details": str(ex)},
        )
