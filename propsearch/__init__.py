"""In-memory full-text search for property listings.

This package builds an inverted index over arbitrary record collections and
ranks queries against it with TF-IDF style weighting and optional fuzzy
matching. Autocomplete, highlighting, index-free relevance scoring, faceted
filtering and a bounded search history are built on top.

Main components:
- tokenize: Japanese-aware tokenizer
- build_search_index / search_index: Index construction and ranked search
- get_suggestions: Prefix autocomplete over the index vocabulary
- highlight_matches: Markup for matched text
- SearchHistory: Recent, deduplicated queries
- SearchService: High-level service holding the current index
"""

__version__ = "1.0.0"

from .config import SearchConfig, load_config
from .engine import FilteredResults, SearchService
from .exceptions import ConfigError, OptionsError, SearchError
from .facets import (
    Facet,
    FacetConfig,
    FacetOption,
    FacetType,
    SortDirection,
    compute_facets,
    filter_by_facets,
    filter_by_range,
    sort_items,
    value_range,
)
from .highlighting import highlight_matches
from .history import SearchHistory, SearchHistoryEntry, create_search_history
from .indexing import (
    FieldAccessible,
    Posting,
    SearchIndex,
    TokenizeOptions,
    build_search_index,
    calculate_tf,
    generate_ngrams,
    get_nested_value,
    tokenize,
)
from .models import (
    FieldTokens,
    FuzzyMatch,
    IndexedItem,
    MatchType,
    SearchResult,
    SuggestionEntry,
)
from .ranking import (
    SearchOptions,
    calculate_relevance_score,
    compute_idf,
    search_index,
)
from .similarity import calculate_similarity, fuzzy_match, levenshtein_distance
from .suggestions import get_suggestions

__all__ = [
    # Tokenization and indexing
    "tokenize",
    "calculate_tf",
    "generate_ngrams",
    "TokenizeOptions",
    "build_search_index",
    "SearchIndex",
    "Posting",
    "get_nested_value",
    "FieldAccessible",
    # Ranking
    "search_index",
    "SearchOptions",
    "calculate_relevance_score",
    "compute_idf",
    # Similarity
    "levenshtein_distance",
    "calculate_similarity",
    "fuzzy_match",
    # Presentation
    "highlight_matches",
    "get_suggestions",
    # History
    "SearchHistory",
    "SearchHistoryEntry",
    "create_search_history",
    # Facets
    "Facet",
    "FacetConfig",
    "FacetOption",
    "FacetType",
    "SortDirection",
    "compute_facets",
    "filter_by_facets",
    "filter_by_range",
    "sort_items",
    "value_range",
    # Service and configuration
    "SearchService",
    "FilteredResults",
    "SearchConfig",
    "load_config",
    # Models
    "FieldTokens",
    "FuzzyMatch",
    "IndexedItem",
    "MatchType",
    "SearchResult",
    "SuggestionEntry",
    # Errors
    "SearchError",
    "OptionsError",
    "ConfigError",
]
