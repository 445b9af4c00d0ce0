from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from pulseboard_backend.app.deps import get_inference_client
from pulseboard_backend.app.services.diagnostics import debug_report
from pulseboard_router.adapters.huggingface import InferenceClient

router = APIRouter(prefix="/api", tags=["debug"])


@router.get("/debug")
async def debug(client: InferenceClient = Depends(get_inference_client)) -> Dict[str, Any]:
    """Debug information for the hosted-inference API. The key is masked."""
    return await debug_report(client)
