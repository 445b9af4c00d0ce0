# src/pulseboard_router/core/clean.py

from __future__ import annotations
from typing import List, Optional, Sequence

HUMAN_MARKER = "Human:"
ASSISTANT_MARKER = "AI:"


def _normalize_whitespace(text: str) -> str:
    """
    Simple whitespace normalization:
      - strip leading/trailing spaces
      - collapse internal runs of whitespace to a single space
    """
    return " ".join(text.split())


def build_prompt(history: Sequence[str], message: str, max_turns: int = 10) -> str:
    """
    Build the generation prompt:

        <up to max_turns earlier speaker-tagged lines>
        Human: <message>
        AI:

    History lines are expected to be already tagged ("Human: ..." / "AI: ...").
    """
    lines: List[str] = []
    recent = list(history)[-max_turns:] if max_turns > 0 else []
    for line in recent:
        line = (line or "").strip()
        if line:
            lines.append(line)

    lines.append(f"{HUMAN_MARKER} {message.strip()}")
    lines.append(ASSISTANT_MARKER)
    return "\n".join(lines)


def clean_generated_text(raw: str, prompt: Optional[str] = None) -> str:
    """
    Strip prompt echo from base models that continue the prompt
    instead of answering it.

    - echoed prompt (history included) -> keep only what follows it
    - echoed assistant marker -> keep only what follows the first "AI:"
    - leaked new "Human:" turn -> cut everything from it onwards
    """
    text = raw or ""

    echo = (prompt or "").strip()
    if echo and echo in text:
        text = text.split(echo, 1)[1]
    elif HUMAN_MARKER in echo:
        # history echoed loosely: resume after the current turn's line
        current_turn = HUMAN_MARKER + echo.rsplit(HUMAN_MARKER, 1)[1].split("\n", 1)[0]
        if current_turn.strip() != HUMAN_MARKER and current_turn in text:
            text = text.rsplit(current_turn, 1)[1]

    if ASSISTANT_MARKER in text:
        text = text.split(ASSISTANT_MARKER, 1)[1]

    if HUMAN_MARKER in text:
        text = text.split(HUMAN_MARKER, 1)[0]

    return _normalize_whitespace(text)
