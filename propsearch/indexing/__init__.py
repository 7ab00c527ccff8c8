"""Indexing components: tokenization, field resolution and the inverted index."""

from .analyzers import (
    JAPANESE_STOP_WORDS,
    TokenizeOptions,
    calculate_tf,
    generate_ngrams,
    tokenize,
)
from .fields import FieldAccessible, get_nested_value, stringify_value
from .indexer import Posting, SearchIndex, build_search_index

__all__ = [
    "JAPANESE_STOP_WORDS",
    "TokenizeOptions",
    "calculate_tf",
    "generate_ngrams",
    "tokenize",
    "FieldAccessible",
    "get_nested_value",
    "stringify_value",
    "Posting",
    "SearchIndex",
    "build_search_index",
]
