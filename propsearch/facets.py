"""Faceted filtering, range filtering and sorting of records.

These helpers narrow and order a list of records, typically the items of
the search results, by field values. Fields are dot paths as elsewhere in
the package.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from datetime import date, datetime
from enum import Enum
from functools import cmp_to_key
from typing import Any

from .exceptions import OptionsError
from .indexing.fields import get_nested_value

DEFAULT_RANGE = (0, 100)


class FacetType(str, Enum):
    """How a facet is presented for selection."""

    CHECKBOX = "checkbox"
    RADIO = "radio"
    SELECT = "select"


class SortDirection(str, Enum):
    """Sort directions."""

    ASC = "asc"
    DESC = "desc"


@dataclass
class FacetConfig:
    """Configuration of one facet."""

    field: str
    label: str | None = None
    type: FacetType = FacetType.CHECKBOX


@dataclass(frozen=True)
class FacetOption:
    """A selectable facet value with the number of records having it."""

    value: Any
    count: int
    label: str


@dataclass
class Facet:
    """Counted values of one field."""

    field: str
    label: str
    type: FacetType
    options: list[FacetOption] = dataclass_field(default_factory=list)
    selected: list[Any] = dataclass_field(default_factory=list)

    def get_option(self, value: Any) -> FacetOption | None:
        """Get the option for a value, if any record has it."""
        for option in self.options:
            if option.value == value:
                return option
        return None


def extract_field_values(item: Any, field_name: str) -> list[Any]:
    """Values of a field, with list values flattened one level."""
    value = get_nested_value(item, field_name)
    if value is None:
        return []
    if isinstance(value, list | tuple | set | frozenset):
        return [v for v in value if v is not None]
    return [value]


def compute_facets(
    items: Iterable[Any],
    facet_configs: list[FacetConfig],
    selections: Mapping[str, list[Any]] | None = None,
) -> dict[str, Facet]:
    """Count field values across records for each configured facet.

    Args:
        items: Records to count over
        facet_configs: Facets to compute
        selections: Currently selected values per field

    Returns:
        Facets keyed by field, options ordered by count descending
    """
    items = list(items)
    selections = selections or {}
    facets = {}

    for config in facet_configs:
        counts: dict[Any, int] = {}
        for item in items:
            for value in extract_field_values(item, config.field):
                counts[value] = counts.get(value, 0) + 1

        # Stable sort keeps first-seen order for equal counts
        ordered = sorted(counts.items(), key=lambda pair: pair[1], reverse=True)

        facets[config.field] = Facet(
            field=config.field,
            label=config.label or config.field,
            type=config.type,
            options=[
                FacetOption(value=value, count=count, label=str(value))
                for value, count in ordered
            ],
            selected=list(selections.get(config.field, [])),
        )

    return facets


def filter_by_facets(
    items: Iterable[Any], selections: Mapping[str, list[Any]]
) -> list[Any]:
    """Keep records matching every non-empty facet selection.

    For list-valued fields a record matches when any of its values is
    selected.
    """
    active = {name: selected for name, selected in selections.items() if selected}
    if not active:
        return list(items)

    def matches(item: Any) -> bool:
        for field_name, selected in active.items():
            value = get_nested_value(item, field_name)
            if isinstance(value, list | tuple | set | frozenset):
                if not any(v in selected for v in value):
                    return False
            elif value not in selected:
                return False
        return True

    return [item for item in items if matches(item)]


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def value_range(
    items: Iterable[Any],
    field_name: str,
    minimum: float | None = None,
    maximum: float | None = None,
) -> tuple[float, float]:
    """Bounds of a numeric field across records.

    Args:
        items: Records to scan
        field_name: Numeric field
        minimum: Fixed lower bound overriding the scanned one
        maximum: Fixed upper bound overriding the scanned one

    Returns:
        (min, max), falling back to (0, 100) when no value is numeric
    """
    if minimum is not None and maximum is not None:
        return minimum, maximum

    numbers = [
        value
        for value in (get_nested_value(item, field_name) for item in items)
        if _is_number(value)
    ]

    low = minimum if minimum is not None else (min(numbers) if numbers else DEFAULT_RANGE[0])
    high = maximum if maximum is not None else (max(numbers) if numbers else DEFAULT_RANGE[1])
    return low, high


def filter_by_range(
    items: Iterable[Any],
    field_name: str,
    minimum: float | None = None,
    maximum: float | None = None,
) -> list[Any]:
    """Keep records whose numeric field lies within inclusive bounds.

    Records without a numeric value are kept. Either bound may be None.
    """
    if minimum is None and maximum is None:
        return list(items)

    kept = []
    for item in items:
        value = get_nested_value(item, field_name)
        if not _is_number(value):
            kept.append(item)
            continue
        if minimum is not None and value < minimum:
            continue
        if maximum is not None and value > maximum:
            continue
        kept.append(item)
    return kept


def _natively_comparable(a: Any, b: Any) -> bool:
    if isinstance(a, str) and isinstance(b, str):
        return True
    if _is_number(a) and _is_number(b):
        return True
    if isinstance(a, datetime) and isinstance(b, datetime):
        return True
    return type(a) is date and type(b) is date


def _compare_values(a: Any, b: Any) -> int:
    if not _natively_comparable(a, b):
        a, b = str(a), str(b)
    return (a > b) - (a < b)


def sort_items(
    items: Iterable[Any],
    field_name: str | None,
    direction: SortDirection | str = SortDirection.ASC,
) -> list[Any]:
    """Sort records by a field.

    Records missing the field sort last in either direction. Strings,
    numbers and dates compare natively; mixed types compare as strings.

    Args:
        items: Records to sort
        field_name: Field to sort by, None keeps the input order
        direction: ``"asc"`` or ``"desc"``

    Returns:
        A new sorted list

    Raises:
        OptionsError: If direction is not asc or desc
    """
    try:
        direction = SortDirection(direction)
    except ValueError:
        raise OptionsError("direction", f"expected asc or desc, got {direction!r}")

    items = list(items)
    if not field_name:
        return items

    sign = -1 if direction == SortDirection.DESC else 1

    def compare(a: Any, b: Any) -> int:
        a_value = get_nested_value(a, field_name)
        b_value = get_nested_value(b, field_name)
        if a_value is None and b_value is None:
            return 0
        if a_value is None:
            return 1
        if b_value is None:
            return -1
        return sign * _compare_values(a_value, b_value)

    return sorted(items, key=cmp_to_key(compare))
