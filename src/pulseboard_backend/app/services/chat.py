# src/pulseboard_backend/app/services/chat.py
from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from pulseboard_router.adapters.huggingface import InferenceClient
from pulseboard_router.core.builtin import find_builtin_response, find_common_answer
from pulseboard_router.core.clean import build_prompt
from pulseboard_router.core.commands import execute_command, route_command
from pulseboard_router.core.config import section
from pulseboard_router.core.fallback import generate_reply
from pulseboard_router.models import ConversationContext, Intent

logger = logging.getLogger(__name__)


class ChatReply(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    response: str
    context: ConversationContext
    detected_command: Optional[str] = None
    command_params: List[str] = Field(default_factory=list)
    model_used: Optional[str] = None
    source: str  # builtin | command | common | model


async def handle_message(
    message: str,
    context: Optional[ConversationContext],
    history: Sequence[str],
    client: InferenceClient,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> ChatReply:
    """
    One chat turn:

      1) built-in replies (exact match)       -> no network
      2) command router + local handlers      -> no network
      3) common-question table                -> no network
      4) generation fallback chain            -> hosted models

    The incoming context is never mutated; an updated copy is returned.
    """
    ctx = (context or ConversationContext()).model_copy(deep=True)
    ctx.message_count += 1
    text = message.strip()

    builtin = find_builtin_response(text)
    if builtin is not None:
        return ChatReply(response=builtin, context=ctx, source="builtin")

    match = route_command(text)
    if match.intent != Intent.none:
        logger.info("chat: command=%s params=%s", match.intent.value, match.params)
        ctx.last_command = match.intent.value
        ctx.previous_topic = match.intent.value
        if match.params:
            ctx.recent_entities = (ctx.recent_entities + match.params)[-5:]
        return ChatReply(
            response=execute_command(match, now=now, rng=rng),
            context=ctx,
            detected_command=match.intent.value,
            command_params=match.params,
            source="command",
        )

    common = find_common_answer(text, rng=rng)
    if common is not None:
        return ChatReply(response=common, context=ctx, source="common")

    turns = int(section("generation").get("history_turns", 10))
    prompt = build_prompt(history, text, max_turns=turns)
    result = await generate_reply(prompt, client, rng=rng)
    logger.info("chat: reply generated by %s", result.model_used)

    return ChatReply(
        response=result.text,
        context=ctx,
        model_used=result.model_used,
        source="model",
    )
