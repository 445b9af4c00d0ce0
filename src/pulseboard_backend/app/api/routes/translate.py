from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from pulseboard_backend.app.deps import get_inference_client
from pulseboard_router.adapters.huggingface import InferenceClient
from pulseboard_router.core.fallback import translate as run_translation
from pulseboard_router.models import TranslationRequest

router = APIRouter(prefix="/api", tags=["translate"])


@router.post("/translate")
async def translate(
    req: TranslationRequest,
    client: InferenceClient = Depends(get_inference_client),
) -> Any:
    if not req.text.strip() or not req.source_lang.strip() or not req.target_lang.strip():
        return JSONResponse(
            status_code=400,
            content={
                "error": "Text, source language, and target language are required",
                "translation": "Error: Missing required fields (text, sourceLang, or targetLang).",
            },
        )

    result = await run_translation(req.text, req.source_lang, req.target_lang, client)
    body = result.model_dump(exclude_none=True)
    if not client.configured:
        body["mockData"] = True
    return body
