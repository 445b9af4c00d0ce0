from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from pulseboard_backend.app.deps import get_inference_client
from pulseboard_backend.app.services.chat import handle_message
from pulseboard_router.adapters.huggingface import InferenceClient
from pulseboard_router.models import ConversationContext

router = APIRouter(prefix="/api", tags=["chat"])

# ---------- Models ----------

class ChatRequest(BaseModel):
    message: Optional[str] = Field(None, description="User utterance.")
    context: Optional[ConversationContext] = Field(None, description="Context returned by the previous turn.")
    history: List[str] = Field(default_factory=list, description="Prior transcript lines, oldest first.")

# ---------- Endpoints ----------

@router.post("/chat")
async def chat(
    req: ChatRequest,
    client: InferenceClient = Depends(get_inference_client),
) -> Any:
    """
    One assistant turn. Always 200 once a message is present; a missing key
    or failing models surface as explanatory text in `response`.
    """
    if not req.message or not req.message.strip():
        return JSONResponse(
            status_code=400,
            content={"error": "Message is required", "response": "Error: No message provided."},
        )

    reply = await handle_message(req.message, req.context, req.history, client)
    body: Dict[str, Any] = reply.model_dump()
    if not client.configured and reply.source == "model":
        body["error"] = "API key not configured"
    return body
