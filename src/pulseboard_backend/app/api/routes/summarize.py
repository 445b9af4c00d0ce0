from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from pulseboard_backend.app.deps import get_inference_client
from pulseboard_backend.app.services.summarize import PdfExtractionError, summarize_pdf
from pulseboard_router.adapters.huggingface import InferenceClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["summarize"])


def _bad_request(error: str, summary: Optional[str] = None) -> JSONResponse:
    content = {"error": error}
    if summary is not None:
        content["summary"] = summary
    return JSONResponse(status_code=400, content=content)


@router.post("/summarize")
async def summarize(
    file: Optional[UploadFile] = File(None),
    client: InferenceClient = Depends(get_inference_client),
) -> Any:
    """
    Summarize an uploaded PDF (multipart field `file`).
    """
    if not client.configured:
        return _bad_request(
            "API key not configured",
            "Error: Hugging Face API key is not configured. Please add your HUGGINGFACE_API_KEY to the .env file.",
        )
    if file is None:
        return _bad_request("No file provided", "Error: No PDF file was uploaded.")

    filename = file.filename or ""
    if not filename.lower().endswith(".pdf"):
        return _bad_request("Uploaded file must be a PDF")

    data = await file.read()
    logger.info("parsing PDF %s (%d bytes)", filename, len(data))
    try:
        return await summarize_pdf(data, filename, client)
    except PdfExtractionError as ex:
        logger.warning("unreadable PDF %s: %s", filename, ex)
        return _bad_request("Failed to parse PDF", f"Error: {ex}")
