"""Shared query parameter parsing utilities for framework adapters.

Every parser is lenient: missing or invalid values fall back to defaults
instead of failing the request.
"""

from logscope.core.models import (
    SORT_DIRECTIONS,
    SORT_FIELDS,
    DateInterval,
    FilterCriteria,
    SortSpec,
)
from logscope.core.timestamps import parse_day

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _first(params: dict[str, list[str]], name: str) -> str | None:
    values = params.get(name)
    return values[0] if values else None


def _parse_page_param(params: dict[str, list[str]]) -> int:
    """Parse the 1-based 'page' parameter, defaulting to 1."""
    raw = _first(params, "page")
    if raw is None:
        return 1
    try:
        return int(raw)
    except ValueError:
        return 1


def _parse_unique_param(params: dict[str, list[str]]) -> bool:
    """Parse the 'unique' flag."""
    raw = _first(params, "unique")
    return raw is not None and raw.strip().lower() in _TRUE_VALUES


def _parse_interval_params(params: dict[str, list[str]]) -> DateInterval | None:
    """Parse 'start' and 'end' days. Both must be valid for an interval."""
    start = parse_day(_first(params, "start"))
    end = parse_day(_first(params, "end"))
    if start is None or end is None:
        return None
    return DateInterval(start, end)


def _parse_sort_params(params: dict[str, list[str]]) -> SortSpec:
    """Parse 'sort' and 'direction', ignoring unknown values."""
    default = SortSpec()
    field = _first(params, "sort")
    direction = _first(params, "direction")
    if field not in SORT_FIELDS:
        field = default.field
    if direction not in SORT_DIRECTIONS:
        direction = default.direction
    return SortSpec(field, direction)  # type: ignore[arg-type]


def _parse_criteria_params(params: dict[str, list[str]]) -> FilterCriteria:
    """Build FilterCriteria from 'q', 'start', 'end' and 'unique'."""
    return FilterCriteria(
        query=_first(params, "q") or "",
        interval=_parse_interval_params(params),
        dedup_by_address=_parse_unique_param(params),
    )
