"""
Tokenizer shared by indexing and querying.

A token is a maximal run of alphabetic characters (any script), lowercased.
Digits, punctuation and whitespace are separators and never become tokens.
"""

from typing import Iterable

from nltk.tokenize import RegexpTokenizer

# Letters only: \w minus digits and underscore.
_ALPHA_TOKENIZER = RegexpTokenizer(r"[^\W\d_]+")


def tokenize(text: str) -> list[str]:
    """
    Split text into lowercase alphabetic tokens.
    "Apple-pie, 2x apples!" -> ["apple", "pie", "x", "apples"]
    """
    if not text:
        return []
    return _ALPHA_TOKENIZER.tokenize(text.lower())


def normalize_tokens(tokens: Iterable[str]) -> list[str]:
    """Lowercase already-split tokens and drop empty ones."""
    return [t.lower() for t in tokens if t]
