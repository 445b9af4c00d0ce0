# src/pulseboard_backend/app/core/logging.py
from __future__ import annotations
import logging
import os
from typing import Dict, List

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR":    logging.ERROR,
    "WARNING":  logging.WARNING,
    "INFO":     logging.INFO,
    "DEBUG":    logging.DEBUG,
    "NOTSET":   logging.NOTSET,
}

# env var -> widget(s) that go dark without it
REQUIRED_KEYS: Dict[str, str] = {
    "HUGGINGFACE_API_KEY": "chat, translate, sentiment, summarize",
    "NEWS_API_KEY": "news",
    "ALPHA_VANTAGE_API_KEY": "stocks (mock data only)",
}

_log = logging.getLogger("pulseboard.startup")


def _level_from_env(var: str, default: str = "INFO") -> int:
    val = (os.getenv(var, default) or "").strip().upper()
    return _LEVELS.get(val, _LEVELS[default])


def setup_logging() -> None:
    """
    Configure root logging once. Idempotent.
    LOG_LEVEL controls verbosity (default INFO).
    """
    root = logging.getLogger()
    if root.handlers:
        # already configured (pytest, uvicorn, etc.)
        root.setLevel(_level_from_env("LOG_LEVEL", "INFO"))
        return

    level = _level_from_env("LOG_LEVEL", "INFO")
    fmt = "%(asctime)s.%(msecs)03d %(levelname)-8s %(name)s %(message)s"
    datefmt = "%Y-%m-%dT%H:%M:%S"

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))

    root.setLevel(level)
    root.addHandler(handler)


def report_missing_keys() -> List[str]:
    """
    Log each missing provider key once at startup.
    Returns the missing env var names.
    """
    missing = [name for name in REQUIRED_KEYS if not (os.getenv(name) or "").strip()]
    for name in missing:
        _log.warning("%s is not set; affected: %s", name, REQUIRED_KEYS[name])
    return missing
