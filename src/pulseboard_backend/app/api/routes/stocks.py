from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from pulseboard_backend.app.deps import get_inference_client
from pulseboard_backend.app.services.stocks import get_stock_data
from pulseboard_router.adapters.huggingface import InferenceClient

router = APIRouter(prefix="/api", tags=["stocks"])


@router.get("/stocks")
async def stocks(
    symbol: str = Query("AAPL", description="Ticker symbol"),
    client: InferenceClient = Depends(get_inference_client),
) -> Dict[str, Any]:
    """Quote, ~30 daily closes and a price sentiment; mock data when the provider is unavailable."""
    return await get_stock_data(symbol.strip().upper() or "AAPL", client)
