"""Ranking of records against a query.

Two scoring paths are provided. ``search_index`` ranks every record of a
prebuilt ``SearchIndex`` with a TF-IDF style score, optionally extended by a
brute-force fuzzy pass over the vocabulary. ``calculate_relevance_score``
scores one record directly and suits short lists where building an index is
not worth it.
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

from .exceptions import OptionsError
from .indexing.analyzers import tokenize
from .indexing.fields import get_nested_value, is_present, stringify_value
from .indexing.indexer import DEFAULT_FIELD_WEIGHT, Posting, SearchIndex
from .models import MatchType, SearchResult
from .similarity import fuzzy_match

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchOptions:
    """Options for querying a search index."""

    limit: int = 50
    threshold: float = 0.0
    fuzzy: bool = False
    fuzzy_threshold: float = 0.8
    boost_exact: float = 2.0

    def __post_init__(self):
        """Validate option values."""
        if isinstance(self.limit, bool) or not isinstance(self.limit, int):
            raise OptionsError("limit", "must be an integer")
        for name in ("threshold", "fuzzy_threshold", "boost_exact"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int | float):
                raise OptionsError(name, "must be a number")
        if self.limit < 0:
            raise OptionsError("limit", "must not be negative")
        if not 0.0 <= self.fuzzy_threshold <= 1.0:
            raise OptionsError("fuzzy_threshold", "must be between 0 and 1")
        if self.boost_exact < 0:
            raise OptionsError("boost_exact", "must not be negative")


def compute_idf(total_docs: int, doc_freq: int) -> float:
    """Inverse document frequency, ``ln(total_docs / doc_freq)``.

    A token found in every document scores 0.
    """
    if total_docs <= 0 or doc_freq <= 0:
        return 0.0
    return math.log(total_docs / doc_freq)


def _weighted_term_frequency(
    index: SearchIndex, item_id: Any, posting: Posting, scale: float = 1.0
) -> float:
    """Sum of field-weighted, length-normalized term frequencies for a hit."""
    field_tokens = index.items[item_id].field_tokens
    score = 0.0

    # Iterate in indexed field order so float sums do not depend on hashing
    for field_name, tokens in field_tokens.items():
        count = posting.field_counts.get(field_name)
        if not count:
            continue
        score += index.field_weight(field_name) * scale * (count / len(tokens.tokens))

    return score


def search_index(
    index: SearchIndex,
    query: str | None,
    *,
    limit: int = 50,
    threshold: float = 0.0,
    fuzzy: bool = False,
    fuzzy_threshold: float = 0.8,
    boost_exact: float = 2.0,
) -> list[SearchResult]:
    """Rank indexed records against a query.

    Args:
        index: Index built by ``build_search_index``
        query: Free text query
        limit: Maximum number of results
        threshold: Results scoring at or below this are dropped
        fuzzy: Also score vocabulary tokens similar to query tokens
        fuzzy_threshold: Minimum similarity for a fuzzy token match
        boost_exact: Multiplier for exact token matches

    Returns:
        Results ordered by descending score; ties keep indexing order
    """
    if not query or not query.strip():
        return []

    options = SearchOptions(
        limit=limit,
        threshold=threshold,
        fuzzy=fuzzy,
        fuzzy_threshold=fuzzy_threshold,
        boost_exact=boost_exact,
    )

    scores: dict[Any, float] = {}

    for query_token in tokenize(query):
        # Exact matches
        docs = index.inverted_index.get(query_token)
        if docs:
            idf = compute_idf(index.document_count, len(docs))
            for item_id, posting in docs.items():
                token_score = _weighted_term_frequency(index, item_id, posting)
                token_score *= idf * options.boost_exact
                scores[item_id] = scores.get(item_id, 0.0) + token_score

        if not options.fuzzy:
            continue

        # Fuzzy matches over the whole vocabulary
        candidates = [token for token in index.inverted_index if token != query_token]
        matches = process.extract(
            query_token, candidates, scorer=Levenshtein.distance, limit=None
        )

        # Sorted by token so scores do not depend on item order
        similar = []
        for token, distance, _ in matches:
            max_len = max(len(query_token), len(token))
            similarity = (max_len - distance) / max_len
            if similarity >= options.fuzzy_threshold:
                similar.append((token, similarity))
        similar.sort()

        for index_token, similarity in similar:
            fuzzy_docs = index.inverted_index[index_token]
            idf = compute_idf(index.document_count, len(fuzzy_docs))
            for item_id, posting in fuzzy_docs.items():
                token_score = _weighted_term_frequency(
                    index, item_id, posting, scale=similarity
                )
                scores[item_id] = scores.get(item_id, 0.0) + token_score * idf

    ranked = sorted(
        (
            (item_id, score)
            for item_id, score in scores.items()
            if score > options.threshold
        ),
        key=lambda pair: (-pair[1], index.items[pair[0]].position),
    )

    logger.debug(f"Query {query!r} matched {len(ranked)} of {index.document_count} items")

    return [
        SearchResult(item=index.items[item_id].item, score=score, id=item_id)
        for item_id, score in ranked[: options.limit]
    ]


def calculate_relevance_score(
    query: str | None,
    item: Any,
    fields: list[str],
    weights: Mapping[str, float] | None = None,
) -> float:
    """Score one record against a query without an index.

    Every query token is fuzzy-matched against every present field. Matches
    add ``score * weight``; a field whose whole text equals the query counts
    double. The sum is normalized by the total weight of present fields.

    Args:
        query: Free text query
        item: Record to score
        fields: Dot paths of fields to consider
        weights: Per-field weights, unlisted fields weigh 1.0

    Returns:
        Normalized relevance score, 0.0 when nothing can be scored
    """
    if not query:
        return 0.0

    weights = weights or {}
    query_tokens = tokenize(query)
    query_lower = query.lower()
    total_score = 0.0
    max_possible_score = 0.0

    for field_name in fields:
        value = get_nested_value(item, field_name)
        if not is_present(value):
            continue

        text = stringify_value(value)
        weight = weights.get(field_name, DEFAULT_FIELD_WEIGHT)
        max_possible_score += weight

        for token in query_tokens:
            result = fuzzy_match(token, text)
            if not result.match:
                continue

            field_score = result.score * weight

            # Boost for exact field matches
            if result.type == MatchType.EXACT and text.lower() == query_lower:
                field_score *= 2

            total_score += field_score

    return total_score / max_possible_score if max_possible_score > 0 else 0.0
