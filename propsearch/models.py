"""Data models for search functionality using msgspec for performance."""

from __future__ import annotations

from enum import Enum
from typing import Any

import msgspec


class MatchType(str, Enum):
    """Kinds of ad-hoc fuzzy matches, strongest first."""

    EXACT = "exact"
    PREFIX = "prefix"
    FUZZY = "fuzzy"
    SUBSEQUENCE = "subsequence"


class FieldTokens(msgspec.Struct, frozen=True):
    """Tokens produced for one field of one indexed item."""

    tokens: tuple[str, ...]
    weight: float
    text: str


class IndexedItem(msgspec.Struct, frozen=True):
    """An item stored in a search index.

    ``item`` is the caller's own record, shared rather than copied, so it
    must stay valid for as long as the index is in use. ``position`` is the
    order in which the item was indexed and breaks ranking ties.
    """

    id: Any
    item: Any
    field_tokens: dict[str, FieldTokens]
    position: int


class SearchResult(msgspec.Struct, frozen=True):
    """A single ranked search hit."""

    item: Any
    score: float
    id: Any


class SuggestionEntry(msgspec.Struct, frozen=True):
    """An autocomplete candidate with its document frequency."""

    term: str
    count: int


class FuzzyMatch(msgspec.Struct, frozen=True):
    """Outcome of matching one query token against a piece of text."""

    match: bool
    score: float = 0.0
    type: MatchType | None = None

    @classmethod
    def none(cls) -> FuzzyMatch:
        """Create a non-match."""
        return cls(match=False, score=0.0, type=None)
