"""Search service tying indexing, ranking, suggestions and history together."""

import logging
import time
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass, field, replace
from typing import Any

from .config import SearchConfig
from .facets import (
    Facet,
    FacetConfig,
    SortDirection,
    compute_facets,
    filter_by_facets,
    filter_by_range,
    sort_items,
)
from .highlighting import highlight_matches
from .history import SearchHistory
from .indexing.indexer import SearchIndex, build_search_index
from .models import SearchResult, SuggestionEntry
from .ranking import calculate_relevance_score, search_index
from .suggestions import get_suggestions

logger = logging.getLogger(__name__)


@dataclass
class FilteredResults:
    """Records left after searching, facet filtering, range filtering and sorting."""

    items: list[Any]
    facets: dict[str, Facet] = field(default_factory=dict)
    total_count: int = 0
    query: str | None = None

    @property
    def filtered_count(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        """Check if no records are left."""
        return not self.items


class SearchService:
    """Search over one record collection.

    The service owns the current index and replaces it whenever the records
    change. Anyone still holding a previous index keeps using it unchanged.
    """

    def __init__(
        self,
        items: Iterable[Any] | None = None,
        fields: list[str] | None = None,
        config: SearchConfig | None = None,
        history: SearchHistory | None = None,
    ):
        """Initialize search service.

        Args:
            items: Records to index
            fields: Dot paths of fields to index
            config: Search defaults (default: SearchConfig())
            history: Search history to record queries in
        """
        self.fields = list(fields or [])
        self.config = config or SearchConfig()
        self.history = (
            history if history is not None else SearchHistory(self.config.history_max_items)
        )
        self._items: list[Any] = []
        self._index: SearchIndex | None = None

        if items is not None:
            self.set_items(items)

    @property
    def index(self) -> SearchIndex | None:
        """The current index, None before any records were set."""
        return self._index

    @property
    def items(self) -> list[Any]:
        return list(self._items)

    def set_items(self, items: Iterable[Any]) -> SearchIndex:
        """Replace the records and rebuild the index.

        Args:
            items: New records

        Returns:
            The newly built index
        """
        start_time = time.time()
        items = list(items)
        index = build_search_index(
            items,
            self.fields,
            weights=self.config.weights,
            tokenize_options=self.config.tokenizer,
        )
        self._items = items
        self._index = index

        took_ms = (time.time() - start_time) * 1000
        logger.info(f"Built search index for {len(items)} items in {took_ms:.1f} ms")
        return index

    def search(
        self, query: str | None, record: bool = True, **overrides: Any
    ) -> list[SearchResult]:
        """Search the current records.

        Args:
            query: Free text query
            record: Whether to add the query to history
            **overrides: Search options overriding the configuration

        Returns:
            Ranked results, empty for short queries or before indexing
        """
        if not query or len(query.strip()) < self.config.min_query_length:
            return []
        if self._index is None:
            return []

        options = replace(self.config.search_options(), **overrides)
        results = search_index(self._index, query, **asdict(options))

        if record:
            self.history.add(query.strip())

        return results

    def suggest(self, prefix: str | None, limit: int | None = None) -> list[SuggestionEntry]:
        """Autocomplete suggestions for a prefix."""
        if self._index is None:
            return []
        return get_suggestions(
            self._index,
            prefix,
            limit=limit if limit is not None else self.config.suggestion_limit,
            min_length=self.config.suggestion_min_length,
        )

    def highlight(self, text: str | None, query: str | None, **kwargs: Any) -> str | None:
        """Highlight query matches in text for display."""
        return highlight_matches(text, query, **kwargs)

    def score(self, query: str, item: Any) -> float:
        """Index-free relevance of one record over the service's fields."""
        return calculate_relevance_score(query, item, self.fields, self.config.weights)

    def rank_list(self, query: str, items: Iterable[Any]) -> list[tuple[Any, float]]:
        """Rank a short list of records without building an index.

        Returns:
            (record, score) pairs with a positive score, best first
        """
        scored = [(item, self.score(query, item)) for item in items]
        return sorted(
            [pair for pair in scored if pair[1] > 0],
            key=lambda pair: pair[1],
            reverse=True,
        )

    def search_and_filter(
        self,
        query: str | None = None,
        facet_configs: list[FacetConfig] | None = None,
        selections: Mapping[str, list[Any]] | None = None,
        ranges: Mapping[str, tuple[float | None, float | None]] | None = None,
        sort_field: str | None = None,
        sort_direction: SortDirection | str = SortDirection.ASC,
    ) -> FilteredResults:
        """Search, then narrow and order the matching records.

        Without a query every record takes part. Facets are counted over the
        searched records before facet selections are applied.

        Args:
            query: Free text query, optional
            facet_configs: Facets to count
            selections: Selected facet values per field
            ranges: Inclusive (min, max) bounds per numeric field
            sort_field: Field to sort by; None keeps relevance order
            sort_direction: ``"asc"`` or ``"desc"``

        Returns:
            FilteredResults with the remaining records and facet counts
        """
        if query and query.strip():
            searched = [result.item for result in self.search(query)]
        else:
            searched = list(self._items)

        selections = selections or {}
        facets = compute_facets(searched, facet_configs or [], selections)
        filtered = filter_by_facets(searched, selections)

        for field_name, (minimum, maximum) in (ranges or {}).items():
            filtered = filter_by_range(filtered, field_name, minimum, maximum)

        return FilteredResults(
            items=sort_items(filtered, sort_field, sort_direction),
            facets=facets,
            total_count=len(self._items),
            query=query,
        )
