"""Field path resolution for indexed records.

Records are opaque to the search engine. A field is addressed by a dot path
such as ``"building.name"`` which is walked through mappings, attributes and
list positions. Records that want full control over lookup can implement the
``FieldAccessible`` protocol instead.
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

_MISSING = object()


@runtime_checkable
class FieldAccessible(Protocol):
    """A record that resolves dot-path field lookups itself."""

    def get_field(self, path: str) -> Any:
        """Return the value at ``path`` or None when it does not exist."""
        ...


def get_nested_value(obj: Any, path: str, default: Any = None) -> Any:
    """Get a nested value from a record by dot path.

    Args:
        obj: Record to read from (mapping, object or FieldAccessible)
        path: Dot separated field path, e.g. ``"building.address.city"``
        default: Value returned when the path cannot be resolved

    Returns:
        The resolved value, or ``default`` when any step is missing or None
    """
    if obj is None or not path:
        return default

    if isinstance(obj, FieldAccessible):
        value = obj.get_field(path)
        return default if value is None else value

    value = obj
    for key in path.split("."):
        if value is None:
            return default
        value = _lookup(value, key)
        if value is _MISSING:
            return default

    return default if value is None else value


def _lookup(value: Any, key: str) -> Any:
    """Resolve a single path segment."""
    if isinstance(value, Mapping):
        return value.get(key, _MISSING)

    if isinstance(value, list | tuple):
        if key.isdigit() and int(key) < len(value):
            return value[int(key)]
        return _MISSING

    return getattr(value, key, _MISSING)


def stringify_value(value: Any) -> str:
    """Convert a resolved field value into searchable text."""
    if isinstance(value, list | tuple | set | frozenset):
        return ",".join(stringify_value(v) for v in value if v is not None)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def is_present(value: Any) -> bool:
    """Check whether a resolved value should be indexed or scored."""
    return value is not None and value != ""
