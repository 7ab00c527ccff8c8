"""Recent search history.

Keeps a short, most-recent-first list of distinct queries for
"recent searches" menus. History lives in memory only and belongs to the
instance that created it.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .exceptions import OptionsError

DEFAULT_MAX_ITEMS = 20


@dataclass(frozen=True)
class SearchHistoryEntry:
    """A single search history entry."""

    query: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "query": self.query,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SearchHistoryEntry:
        """Create from dictionary."""
        return cls(
            query=data["query"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


class SearchHistory:
    """Bounded, deduplicated list of past queries, newest first."""

    def __init__(self, max_items: int = DEFAULT_MAX_ITEMS):
        """Initialize history.

        Args:
            max_items: Number of queries kept before the oldest is evicted

        Raises:
            OptionsError: If max_items is not a positive integer
        """
        if isinstance(max_items, bool) or not isinstance(max_items, int):
            raise OptionsError("max_items", "must be an integer")
        if max_items < 1:
            raise OptionsError("max_items", "must be at least 1")

        self.max_items = max_items
        self._entries: list[SearchHistoryEntry] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, query: str) -> list[str]:
        """Add a query to the front, dropping an older identical one.

        Args:
            query: The search query

        Returns:
            Queries in history after the update
        """
        with self._lock:
            entries = [e for e in self._entries if e.query != query]
            entries.insert(0, SearchHistoryEntry(query=query))
            self._entries = entries[: self.max_items]
            return self._queries()

    def remove(self, query: str) -> list[str]:
        """Remove a query from history.

        Returns:
            Queries in history after the update
        """
        with self._lock:
            self._entries = [e for e in self._entries if e.query != query]
            return self._queries()

    def clear(self) -> list[str]:
        """Clear all search history."""
        with self._lock:
            self._entries = []
            return []

    def get(self) -> list[str]:
        """Get a copy of the queries, newest first."""
        with self._lock:
            return self._queries()

    def entries(self) -> list[SearchHistoryEntry]:
        """Get a copy of the history entries with timestamps."""
        with self._lock:
            return list(self._entries)

    def search(self, text: str) -> list[str]:
        """Find past queries containing text, case-insensitively.

        Args:
            text: Text typed so far

        Returns:
            Matching queries, newest first
        """
        needle = text.lower()
        with self._lock:
            return [e.query for e in self._entries if needle in e.query.lower()]

    def _queries(self) -> list[str]:
        return [e.query for e in self._entries]


def create_search_history(max_items: int = DEFAULT_MAX_ITEMS) -> SearchHistory:
    """Create an empty search history."""
    return SearchHistory(max_items)
