"""Generic text matchers over the vocabulary tables."""

import re
from functools import lru_cache
from typing import Iterable


@lru_cache(maxsize=None)
def _compile(pattern: str, flags: int = re.IGNORECASE) -> re.Pattern:
    return re.compile(pattern, flags)


def matches_any(text: str, patterns: Iterable[str]) -> bool:
    """True if any regex pattern matches (case-insensitive)."""
    return any(_compile(pattern).search(text) for pattern in patterns)


def contains_any(text: str, phrases: Iterable[str]) -> bool:
    """True if any phrase occurs as a substring (case-insensitive)."""
    lowered = text.lower()
    return any(phrase.lower() in lowered for phrase in phrases)


def find_words(text: str, words: Iterable[str]) -> list[str]:
    """Return the words that occur in the text as whole words."""
    return [word for word in words if _compile(rf"\b{re.escape(word)}\b").search(text)]


def has_word(text: str, words: Iterable[str]) -> bool:
    """True if any of the words occurs as a whole word."""
    return bool(find_words(text, words))


def tokenize_words(text: str) -> list[str]:
    """Split text into lowercase alphabetic words."""
    return re.findall(r"[a-z]+", text.lower())


def is_blank(text: str | None) -> bool:
    return text is None or not text.strip()
