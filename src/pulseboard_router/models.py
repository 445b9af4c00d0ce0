# src/pulseboard_router/models.py
from __future__ import annotations
from enum import Enum
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class Intent(str, Enum):
    help = "help"
    time = "time"
    date = "date"
    joke = "joke"
    weather = "weather"
    stock = "stock"
    news = "news"
    translate = "translate"
    sentiment = "sentiment"
    none = "none"


class CommandMatch(BaseModel):
    intent: Intent
    params: List[str] = Field(default_factory=list)


class ConversationContext(BaseModel):
    """
    Per-session state. The caller owns it: it is sent with every chat
    request and the updated copy comes back with the response.
    """
    message_count: int = 0
    last_command: Optional[str] = None
    previous_topic: Optional[str] = None
    recent_entities: List[str] = Field(default_factory=list)


ModelRole = Literal["primary", "backup"]
LangScheme = Literal["iso", "mbart", "flores"]


class ModelCandidate(BaseModel):
    name: str
    role: ModelRole = "primary"
    timeout: float = 10.0
    parameters: Dict[str, Any] = Field(default_factory=dict)
    lang_scheme: LangScheme = "iso"


class GenerationResult(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    text: str
    model_used: str  # model name, or "fallback"


class TranslationRequest(BaseModel):
    """Wire names are camelCase (sourceLang, targetLang); snake_case is accepted too."""
    model_config = ConfigDict(populate_by_name=True)

    text: str = ""
    source_lang: str = Field("", alias="sourceLang")
    target_lang: str = Field("", alias="targetLang")


class TranslationResult(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    translation: str
    model_used: Optional[str] = None
    specialized: bool = False
    models_tried: List[str] = Field(default_factory=list)
    error: Optional[str] = None
