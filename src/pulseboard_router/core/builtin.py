# src/pulseboard_router/core/builtin.py
from __future__ import annotations

import random
from typing import Dict, Optional

# Canned replies answered before any routing or model call.
# Keys are normalized utterances (see normalize_utterance).
BUILT_IN_RESPONSES: Dict[str, str] = {
    # greetings
    "hello": "Hello! How can I assist you today?",
    "hi": "Hi there! How can I help you?",
    "hey": "Hey! What can I do for you?",
    "how are you": "I'm doing well, thank you! How can I help you?",
    # about
    "who are you": "I'm your AI voice assistant, designed to help you with various tasks through voice commands or text input.",
    "what is your name": "I'm your AI assistant, designed to make your life easier through voice and text interaction.",
    # capabilities
    "what can you do": "I can help with various tasks including: answering questions, checking weather, searching information, providing news updates, analyzing sentiment, and translating text. Just ask what you need!",
    "help": "I can assist with various tasks. Try asking about the weather, news, or just chat with me about any topic!",
    # weather without a place
    "what is the weather": "I'd need to know your location to provide accurate weather information. You can say something like 'What's the weather in London?'",
    "another joke": "What do you call a fake noodle? An impasta!",
    # thanks
    "thank you": "You're welcome! Is there anything else I can help you with?",
    "thanks": "No problem at all! Let me know if you need anything else.",
}

COMMON_QUESTIONS: Dict[str, str] = {
    "what is the capital of france": "The capital of France is Paris.",
    "how tall is mount everest": "Mount Everest is approximately 29,032 feet (8,849 meters) tall, making it the highest mountain on Earth.",
    "who wrote romeo and juliet": "Romeo and Juliet was written by William Shakespeare.",
    "what is the largest planet": "Jupiter is the largest planet in our solar system.",
    "when was the declaration of independence signed": "The Declaration of Independence was signed on July 4, 1776.",
    "how many continents are there": "There are seven continents: Africa, Antarctica, Asia, Europe, North America, Australia/Oceania, and South America.",
    "what is the speed of light": "The speed of light in a vacuum is approximately 299,792,458 meters per second (about 186,282 miles per second).",
    "who invented the telephone": "Alexander Graham Bell is credited with inventing the first practical telephone in 1876.",
    "what is the chemical symbol for gold": 'The chemical symbol for gold is Au (from the Latin word "aurum").',
    "how many elements are in the periodic table": "There are 118 elements in the modern periodic table.",
}

HEDGES = [
    "Based on my knowledge, ",
    "I believe ",
    "As far as I understand, ",
    "From what I know, ",
]

_DIRECT_STARTS = ("what", "who", "when", "how")


def normalize_utterance(text: str) -> str:
    """lowercase, straight apostrophes, no trailing punctuation, single spaces"""
    lowered = (text or "").replace("’", "'").lower()
    lowered = " ".join(lowered.split())
    return lowered.rstrip("?!. ,")


def find_builtin_response(text: str) -> Optional[str]:
    """Exact match only; partial matches would catch 'hi' inside 'this'."""
    return BUILT_IN_RESPONSES.get(normalize_utterance(text))


def find_common_answer(text: str, rng: Optional[random.Random] = None) -> Optional[str]:
    """
    Look the utterance up in COMMON_QUESTIONS (exact, or containing a known
    question). Answers to direct wh-/how- questions are returned as-is;
    anything else gets a hedge prefix.
    """
    normalized = normalize_utterance(text)
    if not normalized:
        return None

    answer = COMMON_QUESTIONS.get(normalized)
    if answer is None:
        for question, candidate in COMMON_QUESTIONS.items():
            if question in normalized:
                answer = candidate
                break
    if answer is None:
        return None

    if normalized.startswith(_DIRECT_STARTS):
        return answer

    rng = rng or random
    prefix = rng.choice(HEDGES)
    return prefix + answer[0].lower() + answer[1:]
