# src/pulseboard_router/core/fallback.py
"""
Ordered model fallback chains.

Both chains walk a fixed list of candidates, stop at the first usable
answer, and never raise: every failure becomes either the next attempt or a
well-formed degraded result.
"""
from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional

from pulseboard_router.adapters.huggingface import InferenceClient, InferenceError, first_text
from pulseboard_router.core.clean import clean_generated_text
from pulseboard_router.core.config import (
    CFG,
    generation_candidates,
    section,
    translation_backups,
    translation_specialized_model,
)
from pulseboard_router.core.languages import is_specialized, tag_for, to_language_code
from pulseboard_router.core.trace import model_trace
from pulseboard_router.models import GenerationResult, ModelCandidate, TranslationResult

logger = logging.getLogger(__name__)

FALLBACK_MODEL = "fallback"

FALLBACK_RESPONSES: List[str] = [
    "I'm still learning, but I'd be happy to help you with that if you could rephrase your question.",
    "I'm not sure I understood correctly. Could you please try asking in a different way?",
    "That's an interesting question. Let me think about it and get back to you.",
    "I'm having trouble processing that request. Could we try something else?",
    "I'd like to help with that, but I'm not sure I have the right information. Could you provide more details?",
]

MISSING_KEY_REPLY = (
    "I'm sorry, but the Hugging Face API key is not configured. Please add your "
    "HUGGINGFACE_API_KEY to the .env file to enable me to respond to your messages."
)

MISSING_KEY_TRANSLATION = (
    "API key not configured. Please add your HUGGINGFACE_API_KEY to the .env file."
)


# ============================================================
#  Generation
# ============================================================

async def _attempt_generation(
    client: InferenceClient,
    candidate: ModelCandidate,
    prompt: str,
    min_length: int,
) -> Optional[str]:
    """One bounded attempt. Returns cleaned text, or None if unusable."""
    model_trace("generation.attempt", model=candidate.name, role=candidate.role)
    try:
        data = await client.run(
            candidate.name,
            prompt,
            parameters=candidate.parameters,
            timeout=candidate.timeout,
        )
    except InferenceError as ex:
        logger.warning("generation model %s failed: %s", candidate.name, ex)
        return None

    text = clean_generated_text(first_text(data, "generated_text"), prompt=prompt)
    if len(text) < min_length:
        logger.warning(
            "generation model %s returned unusable output (%d chars)",
            candidate.name,
            len(text),
        )
        return None
    return text


async def generate_reply(
    prompt: str,
    client: InferenceClient,
    cfg: Dict[str, Any] | None = None,
    rng: Optional[random.Random] = None,
) -> GenerationResult:
    """
    Primary model -> one backup -> random canned sentence.

    Always returns non-empty text; model_used names the model that produced
    it, or "fallback".
    """
    if not client.configured:
        return GenerationResult(text=MISSING_KEY_REPLY, model_used=FALLBACK_MODEL)

    cfg = cfg or CFG
    gen_cfg = section("generation", cfg)
    min_length = int(gen_cfg.get("min_response_length", 5))

    candidates = generation_candidates(cfg)
    # primary plus exactly one backup
    primary = candidates[0]
    backup = next((c for c in candidates[1:] if c.role == "backup"), None)
    chain = [primary] + ([backup] if backup else [])

    for candidate in chain:
        text = await _attempt_generation(client, candidate, prompt, min_length)
        if text:
            model_trace("generation.ok", model=candidate.name)
            return GenerationResult(text=text, model_used=candidate.name)

    rng = rng or random
    logger.warning("all generation models failed; using canned fallback reply")
    model_trace("generation.fallback", tried=",".join(c.name for c in chain))
    return GenerationResult(text=rng.choice(FALLBACK_RESPONSES), model_used=FALLBACK_MODEL)


# ============================================================
#  Translation
# ============================================================

def select_translation_model(
    source_code: str,
    target_code: str,
    cfg: Dict[str, Any] | None = None,
) -> str:
    """
    Specialized pair model when the pair involves a specialized language and
    one is registered; otherwise the generic "<prefix>-<src>-<tgt>" name.
    """
    tr_cfg = section("translation", cfg)
    pair = f"{source_code}-{target_code}"
    specialized_pairs: Dict[str, str] = tr_cfg.get("specialized_pairs") or {}

    if (is_specialized(source_code) or is_specialized(target_code)) and pair in specialized_pairs:
        return specialized_pairs[pair]

    prefix = tr_cfg.get("generic_prefix", "Helsinki-NLP/opus-mt")
    return f"{prefix}-{source_code}-{target_code}"


async def _attempt_translation(
    client: InferenceClient,
    model: str,
    text: str,
    timeout: float,
    parameters: Optional[Dict[str, Any]] = None,
    fields: tuple = ("translation_text",),
) -> Optional[str]:
    model_trace("translation.attempt", model=model)
    try:
        data = await client.run(model, text, parameters=parameters, timeout=timeout)
    except InferenceError as ex:
        logger.warning("translation model %s failed: %s", model, ex)
        return None

    translation = first_text(data, *fields)
    if not translation:
        logger.warning("translation model %s returned no translation field", model)
        return None
    return translation


def _tagged_params(candidate: ModelCandidate, source_code: str, target_code: str) -> Dict[str, Any]:
    return {
        **candidate.parameters,
        "src_lang": tag_for(source_code, candidate.lang_scheme),
        "tgt_lang": tag_for(target_code, candidate.lang_scheme),
    }


async def translate(
    text: str,
    source_lang: str,
    target_lang: str,
    client: InferenceClient,
    cfg: Dict[str, Any] | None = None,
) -> TranslationResult:
    """
    Primary (specialized pair or generic pair model)
      -> specialized multilingual model (specialized pairs only)
      -> general multilingual backups, in order
      -> explanatory placeholder

    Total: returns a TranslationResult for any input, never raises.
    """
    cfg = cfg or CFG

    if not client.configured:
        return TranslationResult(
            translation=MISSING_KEY_TRANSLATION,
            error="API key not configured",
        )

    tr_cfg = section("translation", cfg)
    timeout = float(tr_cfg.get("timeout", 6.0))

    source_code = to_language_code(source_lang)
    target_code = to_language_code(target_lang)
    specialized = is_specialized(source_code) or is_specialized(target_code)

    primary = select_translation_model(source_code, target_code, cfg)
    logger.info("translating %s -> %s with %s", source_code, target_code, primary)

    tried: List[str] = [primary]
    translation = await _attempt_translation(client, primary, text, timeout)
    if translation:
        return TranslationResult(
            translation=translation,
            model_used=primary,
            specialized=specialized,
            models_tried=tried,
        )

    fallbacks: List[ModelCandidate] = []
    if specialized:
        spec_model = translation_specialized_model(cfg)
        if spec_model is not None:
            fallbacks.append(spec_model)
    fallbacks.extend(translation_backups(cfg))

    for candidate in fallbacks:
        if candidate.name in tried:
            continue
        tried.append(candidate.name)
        translation = await _attempt_translation(
            client,
            candidate.name,
            text,
            candidate.timeout,
            parameters=_tagged_params(candidate, source_code, target_code),
            fields=("translation_text", "generated_text"),
        )
        if translation:
            return TranslationResult(
                translation=translation,
                model_used=candidate.name,
                specialized=specialized,
                models_tried=tried,
            )

    logger.warning("all translation models failed for %s-%s: %s", source_code, target_code, tried)
    model_trace("translation.exhausted", pair=f"{source_code}-{target_code}", tried=",".join(tried))
    return TranslationResult(
        translation=(
            f"Translation not available for {source_lang} to {target_lang}. "
            "Please try another language pair."
        ),
        specialized=specialized,
        models_tried=tried,
        error="All translation models failed",
    )
