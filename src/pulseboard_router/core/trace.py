# src/pulseboard_router/core/trace.py
from __future__ import annotations
import logging
import os
import time
from typing import Any, Mapping

_log = logging.getLogger("pulseboard.models")


def _trace_enabled() -> bool:
    return (os.getenv("MODEL_TRACE", "")).lower() in ("1", "true", "yes", "on")


def _fmt_kv(d: Mapping[str, Any]) -> str:
    return " ".join(f"{k}={d[k]}" for k in d)


def model_trace(event: str, **kv: Any) -> None:
    """
    Emit a single-line structured log ONLY when MODEL_TRACE=true.
    Example:
      [model] generation.attempt ts=... model=google/flan-t5-xl role=primary
    """
    if not _trace_enabled():
        return
    kv2 = {"ts": int(time.time()), **kv}
    _log.info("[model] %s %s", event, _fmt_kv(kv2))
