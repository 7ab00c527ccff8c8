"""Autocomplete suggestions from an index vocabulary."""

import unicodedata

from .indexing.indexer import SearchIndex
from .models import SuggestionEntry


def display_width(text: str) -> int:
    """Width of text with East Asian wide characters counted twice.

    A single kanji carries about as much meaning as two Latin letters, so
    prefix length limits are measured this way.
    """
    return sum(2 if unicodedata.east_asian_width(char) in ("W", "F") else 1 for char in text)


def get_suggestions(
    index: SearchIndex,
    prefix: str | None,
    *,
    limit: int = 10,
    min_length: int = 2,
) -> list[SuggestionEntry]:
    """Get indexed terms starting with a prefix.

    Args:
        index: Index whose vocabulary is scanned
        prefix: Text typed so far
        limit: Maximum number of suggestions
        min_length: Minimum prefix width before suggesting anything

    Returns:
        Suggestions ordered by document frequency, most common first
    """
    if not prefix or display_width(prefix) < min_length:
        return []

    prefix_lower = prefix.lower()
    suggestions = [
        SuggestionEntry(term=token, count=len(docs))
        for token, docs in index.inverted_index.items()
        if token.lower().startswith(prefix_lower)
    ]

    # Stable sort keeps vocabulary order among equally common terms
    suggestions.sort(key=lambda entry: entry.count, reverse=True)
    return suggestions[:limit]
