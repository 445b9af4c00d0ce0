from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from pulseboard_backend.app.deps import get_inference_client
from pulseboard_backend.app.services.weather import get_weather
from pulseboard_router.adapters.huggingface import InferenceClient

router = APIRouter(prefix="/api", tags=["weather"])


@router.get("/weather")
async def weather(
    location: Optional[str] = Query(None, description="City name"),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
    client: InferenceClient = Depends(get_inference_client),
) -> Dict[str, Any]:
    return await get_weather(client, location=location, lat=lat, lon=lon)
