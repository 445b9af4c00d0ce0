# src/pulseboard_router/core/commands.py
from __future__ import annotations

import random
import re
from datetime import datetime
from typing import Callable, List, Optional, Pattern, Tuple

from pulseboard_router.models import CommandMatch, Intent

Extractor = Callable[["re.Match[str]"], Optional[List[str]]]


def _no_params(_m: "re.Match[str]") -> List[str]:
    return []


def _first_group(m: "re.Match[str]") -> Optional[List[str]]:
    value = (m.group(1) or "").strip()
    return [value] if value else None


def _topic_or_general(m: "re.Match[str]") -> List[str]:
    value = (m.group(1) or "").strip()
    return [value or "general"]


def _two_groups(m: "re.Match[str]") -> Optional[List[str]]:
    first = (m.group(1) or "").strip()
    second = (m.group(2) or "").strip()
    if not first or not second:
        return None
    return [first, second]


def _p(pattern: str) -> Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


# Checked top to bottom; the first hit wins. Meta queries come first so a
# looser topic pattern can never shadow them.
COMMAND_PATTERNS: List[Tuple[Intent, Pattern[str], Extractor]] = [
    (Intent.help, _p(r"(?:help|assist|guidance|commands|what can you do)"), _no_params),
    (
        Intent.time,
        _p(r"(?:what|tell me)(?: is)? the (?:current )?time|what time is it"),
        _no_params,
    ),
    (
        Intent.date,
        _p(r"(?:what|tell me)(?: is)? (?:today's|the current) date|what is the date|what day is it"),
        _no_params,
    ),
    (Intent.joke, _p(r"(?:tell|say)(?: me)? a joke"), _no_params),
    (
        Intent.weather,
        _p(r"(?:what's|what is|how's|how is) the weather(?: like)?(?: in| at)? ([a-zA-Z ]+)"),
        _first_group,
    ),
    (
        # ticker stays case-sensitive: "price" must not be read as a symbol
        Intent.stock,
        _p(
            r"(?:what's|what is|how's|how is) (?:the )?(?:stock |share )?(?:price|quote|stock)"
            r"(?: (?:of|for))? \$?((?-i:[A-Z]{1,5}))\b"
        ),
        _first_group,
    ),
    (
        Intent.news,
        _p(r"(?:show|get|fetch|tell) (?:me )?(?:the )?news(?: about| on| for)? ?([a-zA-Z ]*)"),
        _topic_or_general,
    ),
    (
        Intent.translate,
        _p(r"(?:translate|convert) [\"'](.+?)[\"'] (?:to|into) ([a-zA-Z]+)"),
        _two_groups,
    ),
    (
        Intent.sentiment,
        _p(r"(?:analyze|check) (?:the )?(?:sentiment|feeling|emotion) (?:for|of|about|in) [\"'](.+?)[\"']"),
        _first_group,
    ),
]


def _normalize(text: str) -> str:
    # speech recognition likes typographic apostrophes
    return (text or "").replace("’", "'").replace("‘", "'").strip()


def route_command(text: str) -> CommandMatch:
    """
    Classify an utterance into an Intent plus extracted params.

    Pure function: no I/O, never raises. Unmatched input -> Intent.none.
    """
    normalized = _normalize(text)
    if not normalized:
        return CommandMatch(intent=Intent.none)

    for intent, pattern, extract in COMMAND_PATTERNS:
        m = pattern.search(normalized)
        if not m:
            continue
        params = extract(m)
        if params is None:
            # pattern hit but a required capture was empty; keep looking
            continue
        return CommandMatch(intent=intent, params=params)

    return CommandMatch(intent=Intent.none)


# --- Local handlers ---------------------------------------------------------

HELP_TEXT = """I can help you with several tasks through voice commands:
1. Get weather: "What's the weather in London?"
2. Check stocks: "What's the stock price of AAPL?"
3. Read news: "Show me news about technology"
4. Translate text: "Translate 'Hello world' to Spanish"
5. Analyze sentiment: "Analyze sentiment for 'I love this product'"
6. Ask about the time: "What is the current time?"
7. Ask about the date: "What is today's date?"
8. Request a joke: "Tell me a joke"
9. Chat about any topic you'd like to discuss
What would you like to do?"""

JOKES: List[str] = [
    "Why don't scientists trust atoms? Because they make up everything!",
    "What do you call a fake noodle? An impasta!",
    "Why did the scarecrow win an award? Because he was outstanding in his field!",
    "Why don't eggs tell jokes? They'd crack each other up!",
    "What's the best thing about Switzerland? I don't know, but the flag is a big plus!",
    "Did you hear about the mathematician who's afraid of negative numbers? He'll stop at nothing to avoid them!",
    "Why was the math book sad? It had too many problems.",
    "What's orange and sounds like a parrot? A carrot!",
    "How do you organize a space party? You planet!",
    "Why did the bicycle fall over? Because it was two-tired!",
]


def _format_time(now: datetime) -> str:
    return now.strftime("%I:%M:%S %p").lstrip("0")


def _format_date(now: datetime) -> str:
    # e.g. "Monday, October 19, 2026"
    return f"{now.strftime('%A, %B')} {now.day}, {now.year}"


def execute_command(
    match: CommandMatch,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Answer a routed command.

    help/time/date/joke are answered locally. The widget intents
    (weather, stock, news, translate, sentiment) only get a placeholder on
    the chat path; their real handling lives behind the dashboard widgets.
    """
    now = now or datetime.now()
    rng = rng or random

    if match.intent == Intent.help:
        return HELP_TEXT
    if match.intent == Intent.time:
        return f"The current time is {_format_time(now)}."
    if match.intent == Intent.date:
        return f"Today's date is {_format_date(now)}."
    if match.intent == Intent.joke:
        return rng.choice(JOKES)

    return (
        f"I recognized your {match.intent.value} command with parameters: "
        f"{', '.join(match.params)}. This feature will be implemented soon."
    )
