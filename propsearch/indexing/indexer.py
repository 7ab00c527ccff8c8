"""Inverted index construction for in-memory record collections."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..exceptions import OptionsError
from ..models import FieldTokens, IndexedItem
from .analyzers import TokenizeOptions, tokenize
from .fields import get_nested_value, is_present, stringify_value

logger = logging.getLogger(__name__)

DEFAULT_FIELD_WEIGHT = 1.0


@dataclass
class Posting:
    """Occurrences of one token in one item, counted per field."""

    field_counts: dict[str, int] = field(default_factory=dict)

    @property
    def fields(self) -> frozenset[str]:
        """Fields the token occurs in."""
        return frozenset(self.field_counts)

    @property
    def count(self) -> int:
        """Total occurrences across all fields of the item."""
        return sum(self.field_counts.values())

    def add(self, field_name: str) -> None:
        """Record one more occurrence in a field."""
        self.field_counts[field_name] = self.field_counts.get(field_name, 0) + 1


@dataclass(frozen=True)
class SearchIndex:
    """Inverted index over a fixed set of records.

    An index is never updated in place. When the records change, build a new
    index and drop the old one; readers holding the old index keep a
    consistent view.
    """

    items: dict[Any, IndexedItem]
    inverted_index: dict[str, dict[Any, Posting]]
    document_count: int
    field_weights: dict[str, float]

    def __len__(self) -> int:
        return self.document_count

    @property
    def vocabulary(self) -> list[str]:
        """Distinct indexed tokens in first-seen order."""
        return list(self.inverted_index)

    def field_weight(self, field_name: str) -> float:
        """Get weight for a field."""
        return self.field_weights.get(field_name, DEFAULT_FIELD_WEIGHT)

    def document_frequency(self, token: str) -> int:
        """Number of items containing a token."""
        return len(self.inverted_index.get(token, {}))

    def get_statistics(self) -> dict[str, Any]:
        """Get index statistics."""
        total_postings = sum(len(docs) for docs in self.inverted_index.values())
        return {
            "total_documents": self.document_count,
            "total_terms": len(self.inverted_index),
            "total_postings": total_postings,
        }


def resolve_item_id(item: Any, position: int) -> Any:
    """Use the record's ``id`` when it has one, else its position."""
    item_id = get_nested_value(item, "id")
    return position if item_id is None else item_id


def build_search_index(
    items: Iterable[Any],
    fields: list[str],
    weights: Mapping[str, float] | None = None,
    tokenize_options: TokenizeOptions | None = None,
) -> SearchIndex:
    """Build a search index over records.

    A record whose id is already taken, such as an id-less record whose
    position equals an earlier record's ``id``, is kept under the key
    ``(id, position)``.

    Args:
        items: Records in their natural order (mappings or objects)
        fields: Dot paths of the fields to index, e.g. ``"building.name"``
        weights: Per-field weights, unlisted fields weigh 1.0
        tokenize_options: Options passed through to the tokenizer

    Returns:
        A new SearchIndex

    Raises:
        OptionsError: If a weight is not a number
    """
    field_weights = dict(weights or {})
    for name, weight in field_weights.items():
        if isinstance(weight, bool) or not isinstance(weight, int | float):
            raise OptionsError(f"weights[{name}]", "must be a number")

    token_kwargs = (tokenize_options or TokenizeOptions()).as_kwargs()

    indexed_items: dict[Any, IndexedItem] = {}
    inverted_index: dict[str, dict[Any, Posting]] = {}

    for position, item in enumerate(items):
        item_id = resolve_item_id(item, position)
        if item_id in indexed_items:
            logger.warning(
                f"Item id {item_id!r} at position {position} is already taken, "
                f"indexing it as {(item_id, position)!r}"
            )
            item_id = (item_id, position)

        field_tokens: dict[str, FieldTokens] = {}

        for field_name in fields:
            value = get_nested_value(item, field_name)
            if not is_present(value):
                continue

            text = stringify_value(value)
            tokens = tokenize(text, **token_kwargs)
            field_tokens[field_name] = FieldTokens(
                tokens=tuple(tokens),
                weight=field_weights.get(field_name, DEFAULT_FIELD_WEIGHT),
                text=text,
            )

            for token in tokens:
                postings = inverted_index.setdefault(token, {})
                postings.setdefault(item_id, Posting()).add(field_name)

        indexed_items[item_id] = IndexedItem(
            id=item_id, item=item, field_tokens=field_tokens, position=position
        )

    logger.debug(
        f"Indexed {len(indexed_items)} items over {len(fields)} fields "
        f"({len(inverted_index)} distinct tokens)"
    )

    return SearchIndex(
        items=indexed_items,
        inverted_index=inverted_index,
        document_count=len(indexed_items),
        field_weights=field_weights,
    )
