from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List

import yaml

from pulseboard_router.models import ModelCandidate


# --- Load models.yml once at startup into global CFG -------------------------

# This file lives at: src/pulseboard_router/core/config.py
# models.yml sits next to the package modules: src/pulseboard_router/models.yml
ROOT_DIR = Path(__file__).resolve().parents[1]
CFG_PATH = ROOT_DIR / "models.yml"

with CFG_PATH.open("r", encoding="utf-8") as f:
    CFG: Dict[str, Any] = yaml.safe_load(f)


# --- Secrets ----------------------------------------------------------------

def inference_api_key(cfg: Dict[str, Any] | None = None) -> str:
    """
    Read the hosted-inference key from the env var named in models.yml.
    (.env is loaded by the backend app before this is called.)
    """
    if cfg is None:
        cfg = CFG
    env_name = cfg.get("inference", {}).get("api_key_env", "HUGGINGFACE_API_KEY")
    return (os.getenv(env_name, "") or "").strip()


def inference_base_url(cfg: Dict[str, Any] | None = None) -> str:
    if cfg is None:
        cfg = CFG
    return cfg.get("inference", {}).get(
        "base_url", "https://api-inference.huggingface.co/models"
    )


# --- Section helpers ----------------------------------------------------------

def section(name: str, cfg: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Return one top-level section of models.yml ({} when absent)."""
    if cfg is None:
        cfg = CFG
    return dict(cfg.get(name) or {})


def generation_candidates(cfg: Dict[str, Any] | None = None) -> List[ModelCandidate]:
    """
    Ordered generation candidates: the primary first, then backups in file order.
    """
    gen = section("generation", cfg)
    candidates = [ModelCandidate(**c) for c in gen.get("candidates", [])]
    if not candidates:
        raise RuntimeError("No generation candidates found in models.yml")
    # stable sort keeps file order inside each role
    candidates.sort(key=lambda c: 0 if c.role == "primary" else 1)
    return candidates


def translation_backups(cfg: Dict[str, Any] | None = None) -> List[ModelCandidate]:
    tr = section("translation", cfg)
    return [ModelCandidate(**c) for c in tr.get("backups", [])]


def translation_specialized_model(cfg: Dict[str, Any] | None = None) -> ModelCandidate | None:
    tr = section("translation", cfg)
    entry = tr.get("specialized_model")
    return ModelCandidate(**entry) if entry else None
