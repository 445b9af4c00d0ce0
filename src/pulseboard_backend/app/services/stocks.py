# src/pulseboard_backend/app/services/stocks.py
from __future__ import annotations

import logging
import os
import random
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

import httpx

from pulseboard_router.adapters.huggingface import InferenceClient, InferenceError
from pulseboard_router.core.config import section

logger = logging.getLogger(__name__)

ALPHA_VANTAGE_URL = "https://www.alphavantage.co/query"

_SENTIMENT_LABELS = {
    "POS": ("Positive", 1),
    "NEG": ("Negative", -1),
    "NEU": ("Neutral", 0),
}


class QuoteUnavailable(RuntimeError):
    pass


def alpha_vantage_key() -> str:
    return (os.getenv("ALPHA_VANTAGE_API_KEY", "") or "").strip()


def generate_mock_stock_data(
    symbol: str,
    rng: Optional[random.Random] = None,
    today: Optional[date] = None,
    days: int = 30,
) -> Dict[str, Any]:
    """Random-walk quote plus `days` daily closes, flagged as mock data."""
    rng = rng or random.Random()
    today = today or date.today()

    base_price = rng.random() * 1000 + 50
    change = rng.random() * 20 - 10
    change_percent = change / base_price * 100

    history: List[Dict[str, Any]] = []
    current = base_price - change * 15
    for i in range(days, 0, -1):
        current += (rng.random() * 2 - 1) * (base_price * 0.02)
        current = max(current, 1.0)
        history.append(
            {"date": (today - timedelta(days=i)).isoformat(), "price": round(current, 2)}
        )

    label = rng.choice(["Positive", "Neutral", "Negative"])
    return {
        "symbol": symbol,
        "price": round(base_price, 2),
        "change": round(change, 2),
        "changePercent": round(change_percent, 2),
        "sentiment": label,
        "sentimentScore": rng.random() * 2 - 1,
        "historicalData": history,
        "mockData": True,
    }


def _provider_error(data: Dict[str, Any]) -> Optional[str]:
    for key in ("Note", "Information", "Error Message"):
        if data.get(key):
            return str(data[key])
    return None


def parse_quote(data: Dict[str, Any]) -> Dict[str, float]:
    err = _provider_error(data)
    quote = data.get("Global Quote") or {}
    if err or not quote:
        raise QuoteUnavailable(err or "empty Global Quote")
    return {
        "price": float(quote["05. price"]),
        "change": float(quote["09. change"]),
        "changePercent": float(str(quote["10. change percent"]).rstrip("%")),
    }


def parse_history(data: Dict[str, Any], days: int = 30) -> List[Dict[str, Any]]:
    """Newest `days` closes, returned oldest first."""
    err = _provider_error(data)
    series = data.get("Time Series (Daily)")
    if err or not series:
        raise QuoteUnavailable(err or "missing Time Series (Daily)")
    newest = sorted(series.items(), key=lambda kv: kv[0], reverse=True)[:days]
    return [
        {"date": day, "price": float(values["4. close"])}
        for day, values in reversed(newest)
    ]


async def price_sentiment(
    symbol: str,
    quote: Dict[str, float],
    client: InferenceClient,
) -> Dict[str, Any]:
    """Score a templated price sentence; any failure reads as Neutral."""
    cfg = section("stocks")
    summary = (
        f"The stock price of {symbol} is {quote['price']} with a change of "
        f"{quote['change']} ({quote['changePercent']}%)."
    )
    if not client.configured:
        return {"sentiment": "Neutral", "sentimentScore": 0}

    try:
        data = await client.run(
            cfg.get("sentiment_model", "finiteautomata/bertweet-base-sentiment-analysis"),
            summary,
            timeout=float(cfg.get("sentiment_timeout", 5.0)),
        )
        first = data[0]
        if isinstance(first, list):
            first = max(first, key=lambda r: r.get("score", 0))
        label = str(first.get("label", "NEU")).upper()
    except (InferenceError, LookupError, TypeError, AttributeError) as ex:
        logger.warning("stock sentiment failed for %s: %r", symbol, ex)
        return {"sentiment": "Neutral", "sentimentScore": 0}

    text, score = _SENTIMENT_LABELS.get(label, ("Neutral", 0))
    return {"sentiment": text, "sentimentScore": score}


async def get_stock_data(
    symbol: str,
    client: InferenceClient,
    api_key: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    """
    Live quote + 30 daily closes + sentiment, or mock data when the provider
    is unconfigured, rate limited, or short on history.
    """
    cfg = section("stocks")
    api_key = api_key if api_key is not None else alpha_vantage_key()
    if not api_key:
        logger.info("ALPHA_VANTAGE_API_KEY not set; serving mock data for %s", symbol)
        return generate_mock_stock_data(symbol)

    timeout = float(cfg.get("provider_timeout", 15.0))
    min_points = int(cfg.get("min_history_points", 15))
    days = int(cfg.get("history_days", 30))

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as http:
            quote_resp = await http.get(
                ALPHA_VANTAGE_URL,
                params={"function": "GLOBAL_QUOTE", "symbol": symbol, "apikey": api_key},
            )
            quote = parse_quote(quote_resp.json())

            hist_resp = await http.get(
                ALPHA_VANTAGE_URL,
                params={"function": "TIME_SERIES_DAILY", "symbol": symbol, "apikey": api_key},
            )
            history = parse_history(hist_resp.json(), days=days)
    except (httpx.HTTPError, ValueError, KeyError, QuoteUnavailable) as ex:
        logger.warning("Alpha Vantage unavailable for %s (%r); falling back to mock data", symbol, ex)
        return generate_mock_stock_data(symbol)

    if len(history) < min_points:
        logger.warning("only %d closes for %s; falling back to mock data", len(history), symbol)
        return generate_mock_stock_data(symbol)

    sentiment = await price_sentiment(symbol, quote, client)
    return {
        "symbol": symbol,
        **quote,
        **sentiment,
        "historicalData": history,
    }
