"""Text analyzers for search indexing.

This module provides tokenization for property listings, which mix Japanese
and Latin text. Japanese has no spaces between words, so besides splitting on
punctuation and whitespace the tokenizer also cuts at every switch between
kana and kanji. This approximates word boundaries without a dictionary.
"""

import re
from collections import Counter
from dataclasses import dataclass

from ..exceptions import OptionsError

# Split on whitespace, punctuation and common separators
SEPARATOR_PATTERN = re.compile(r"[\s\-_.,;:!?()\[\]{}'\"<>/\\]+")

# Zero-width boundaries between hiragana/katakana and kanji, in both directions
SCRIPT_BOUNDARY_PATTERN = re.compile(
    r"(?<=[ぁ-ん])(?=[一-龯])"
    r"|(?<=[一-龯])(?=[ぁ-ん])"
    r"|(?<=[ァ-ヶ])(?=[一-龯])"
    r"|(?<=[一-龯])(?=[ァ-ヶ])"
)

JAPANESE_STOP_WORDS = frozenset(
    {
        "の",
        "に",
        "は",
        "を",
        "た",
        "が",
        "で",
        "て",
        "と",
        "し",
        "れ",
        "さ",
        "ある",
        "いる",
        "する",
        "から",
        "など",
        "この",
        "その",
        "あの",
        "どの",
    }
)


@dataclass(frozen=True)
class TokenizeOptions:
    """Configuration for the tokenizer."""

    min_length: int = 1
    lowercase: bool = True
    remove_stop_words: bool = False

    def __post_init__(self):
        """Reject malformed options before they reach an index."""
        if isinstance(self.min_length, bool) or not isinstance(self.min_length, int):
            raise OptionsError("min_length", "must be an integer")
        if self.min_length < 0:
            raise OptionsError("min_length", "must not be negative")

    def as_kwargs(self) -> dict[str, object]:
        """Keyword arguments for ``tokenize``."""
        return {
            "min_length": self.min_length,
            "lowercase": self.lowercase,
            "remove_stop_words": self.remove_stop_words,
        }


def tokenize(
    text: str | None,
    *,
    min_length: int = 1,
    lowercase: bool = True,
    remove_stop_words: bool = False,
) -> list[str]:
    """Split text into normalized search tokens.

    Args:
        text: Input text, may be None or empty
        min_length: Drop tokens shorter than this
        lowercase: Case-fold before splitting
        remove_stop_words: Drop Japanese function words

    Returns:
        List of tokens in text order (duplicates kept)
    """
    if not text:
        return []

    if lowercase:
        text = text.lower()

    tokens = []
    for chunk in SEPARATOR_PATTERN.split(text):
        for token in SCRIPT_BOUNDARY_PATTERN.split(chunk):
            if token and len(token) >= min_length:
                tokens.append(token)

    if remove_stop_words:
        tokens = [token for token in tokens if token not in JAPANESE_STOP_WORDS]

    return tokens


def calculate_tf(tokens: list[str]) -> dict[str, float]:
    """Calculate term frequencies normalized by the token count.

    Args:
        tokens: Tokens of a single text

    Returns:
        Mapping of token to its share of all tokens
    """
    if not tokens:
        return {}

    total = len(tokens)
    return {token: count / total for token, count in Counter(tokens).items()}


def generate_ngrams(text: str | None, n: int = 2) -> list[str]:
    """Generate contiguous character n-grams.

    Args:
        text: Input text
        n: Size of n-grams (default 2)

    Returns:
        List of n-grams in order, empty when text is shorter than n
    """
    if not text or n <= 0 or len(text) < n:
        return []

    return [text[i : i + n] for i in range(len(text) - n + 1)]
