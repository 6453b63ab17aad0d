"""OCR transcript tokenization."""
from __future__ import annotations
import re
from typing import List, Set

_SPLIT_RE = re.compile(r"[^a-z0-9+]+")
_BIGRAM_STRIP_RE = re.compile(r"[^a-z0-9+ ]+")


def tokenize(text: str) -> List[str]:
    """Lowercase single-word tokens; anything but [a-z0-9+] separates words."""
    return [t for t in _SPLIT_RE.split((text or "").lower()) if t]


def bigrams(text: str) -> List[str]:
    """Adjacent whitespace-separated word pairs, e.g. "cutting board"."""
    words = (text or "").lower().split()
    return [_BIGRAM_STRIP_RE.sub("", f"{a} {b}") for a, b in zip(words, words[1:])]


def token_set(text: str) -> Set[str]:
    """Single words plus bigrams, the vocabulary exact text matching runs on."""
    tokens = set(tokenize(text))
    tokens.update(bigrams(text))
    return tokens
