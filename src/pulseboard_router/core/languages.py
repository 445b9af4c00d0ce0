# src/pulseboard_router/core/languages.py
from __future__ import annotations

import logging
from typing import Dict

logger = logging.getLogger(__name__)

# language name -> short code
LANGUAGE_CODES: Dict[str, str] = {
    "english": "en",
    "spanish": "es",
    "french": "fr",
    "german": "de",
    "italian": "it",
    "portuguese": "pt",
    "russian": "ru",
    "japanese": "ja",
    "chinese": "zh",
    "korean": "ko",
    "arabic": "ar",
    "hindi": "hi",
    "telugu": "te",
    "tamil": "ta",
    "kannada": "kn",
    "malayalam": "ml",
    "bengali": "bn",
    "turkish": "tr",
    "dutch": "nl",
    "swedish": "sv",
    "polish": "pl",
    "vietnamese": "vi",
    "thai": "th",
}

# lower-resource languages that get specialized model handling
SPECIALIZED_LANGUAGES = frozenset(
    ["hi", "te", "ta", "kn", "ml", "bn", "gu", "mr", "pa", "or", "as", "sa"]
)

# mBART-50 tags
MBART_CODES: Dict[str, str] = {
    "en": "en_XX",
    "es": "es_XX",
    "fr": "fr_XX",
    "de": "de_DE",
    "it": "it_IT",
    "pt": "pt_XX",
    "ru": "ru_RU",
    "ja": "ja_XX",
    "zh": "zh_CN",
    "ko": "ko_KR",
    "ar": "ar_AR",
    "hi": "hi_IN",
    "te": "te_IN",
    "ta": "ta_IN",
    "kn": "kn_IN",
    "ml": "ml_IN",
    "bn": "bn_IN",
    "tr": "tr_TR",
    "nl": "nl_XX",
    "sv": "sv_XX",
    "pl": "pl_XX",
    "vi": "vi_VN",
    "th": "th_TH",
}

# FLORES-200 tags (IndicTrans2 and NLLB share them)
FLORES_CODES: Dict[str, str] = {
    "en": "eng_Latn",
    "hi": "hin_Deva",
    "te": "tel_Telu",
    "ta": "tam_Taml",
    "kn": "kan_Knda",
    "ml": "mal_Mlym",
    "bn": "ben_Beng",
    "gu": "guj_Gujr",
    "mr": "mar_Deva",
    "pa": "pan_Guru",
    "or": "ory_Orya",
    "as": "asm_Beng",
    "es": "spa_Latn",
    "fr": "fra_Latn",
    "de": "deu_Latn",
    "it": "ita_Latn",
    "pt": "por_Latn",
    "ru": "rus_Cyrl",
    "ja": "jpn_Jpan",
    "zh": "zho_Hans",
    "ko": "kor_Hang",
    "ar": "arb_Arab",
    "tr": "tur_Latn",
    "nl": "nld_Latn",
    "sv": "swe_Latn",
    "pl": "pol_Latn",
    "vi": "vie_Latn",
    "th": "tha_Thai",
}

_SCHEMES: Dict[str, Dict[str, str]] = {
    "mbart": MBART_CODES,
    "flores": FLORES_CODES,
}
_SCHEME_DEFAULTS: Dict[str, str] = {
    "mbart": "en_XX",
    "flores": "eng_Latn",
}


def to_language_code(language: str) -> str:
    """
    Normalize a language name or code to a short code.

    - known names map through LANGUAGE_CODES (case-insensitive)
    - anything two letters long is taken to be a code already
    - everything else degrades to English with a warning
    """
    lowered = (language or "").strip().lower()
    if lowered in LANGUAGE_CODES:
        return LANGUAGE_CODES[lowered]
    if len(lowered) == 2 and lowered.isalpha():
        return lowered

    logger.warning('Language code not found for "%s", defaulting to English', language)
    return "en"


def is_specialized(code: str) -> bool:
    return code.lower() in SPECIALIZED_LANGUAGES


def tag_for(code: str, scheme: str) -> str:
    """Convert a short code into a model's own tag dialect ("iso" passes through)."""
    table = _SCHEMES.get(scheme)
    if table is None:
        return code
    return table.get(code.lower(), _SCHEME_DEFAULTS[scheme])
