# src/pulseboard_backend/app/services/sentiment.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pulseboard_router.adapters.huggingface import InferenceClient
from pulseboard_router.core.config import section

logger = logging.getLogger(__name__)


def _label_rows(data: Any) -> Optional[List[Dict[str, Any]]]:
    """
    Classifier output comes as [[{label, score}, ...]] or [{label, score}, ...].
    """
    if not isinstance(data, list) or not data:
        return None
    first = data[0]
    if isinstance(first, list):
        rows = first
    elif isinstance(first, dict):
        rows = data
    else:
        return None
    return [r for r in rows if isinstance(r, dict) and "label" in r and "score" in r] or None


def score_labels(rows: List[Dict[str, Any]]) -> Dict[str, float]:
    """
    Map POSITIVE/NEGATIVE scores onto [-1, 1].
    Positive wins -> +positive score; otherwise -> -negative score.
    Confidence is the highest score of any label.
    """
    positive = 0.0
    negative = 0.0
    confidence = 0.0
    for row in rows:
        label = str(row["label"]).upper()
        score = float(row["score"])
        if label == "POSITIVE":
            positive = score
        elif label == "NEGATIVE":
            negative = score
        confidence = max(confidence, score)

    sentiment = positive if positive > negative else -negative
    return {"sentiment": sentiment, "confidence": confidence}


async def analyze_sentiment(text: str, client: InferenceClient) -> Dict[str, Any]:
    """
    Returns {"sentiment", "confidence"} and, on an unexpected body, an
    "error" marker with a neutral score. InferenceError propagates to the
    route, which renders it.
    """
    cfg = section("sentiment")
    model = cfg.get("model", "distilbert-base-uncased-finetuned-sst-2-english")

    data = await client.run(model, text, timeout=float(cfg.get("timeout", 10.0)))
    rows = _label_rows(data)
    if rows is None:
        logger.error("unexpected sentiment response shape: %r", data)
        return {
            "sentiment": 0,
            "confidence": 0,
            "error": "Unexpected response format from sentiment analysis API",
        }
    return score_labels(rows)
