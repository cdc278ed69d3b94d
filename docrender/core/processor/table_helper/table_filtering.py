# docrender/core/processor/table_helper/table_filtering.py
"""
Table Filtering - Filter / Search / Sort engine

Pure functions over parsed rows. Each stage returns a new list and never
mutates the parsed rows or their order.

Pipeline (fixed order):
    filter -> search -> sort

- apply_filters: AND across columns, OR within a column's value set
- apply_search: case-insensitive substring over the visible columns
- apply_sort: locale-collated (default "ru"), stable; SortDirection.NONE
  keeps order

State helpers (copy-on-write, never mutate their input):
- toggle_filter / set_filter_value: FilterState updates, empty sets pruned
- toggle_column: VisibleColumns updates
- next_sort_state: tri-state header cycle asc -> desc -> none -> asc

Usage:
    rows = filter_and_sort(table.rows, filters, query, visible, sort_state)
    options = unique_values(table.rows, column)
"""
import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence

from docrender.core.functions.collation import DEFAULT_COLLATION_LOCALE, collation_key
from docrender.core.processor.table_helper.table_constants import SORT_CYCLE, SortDirection
from docrender.core.processor.table_helper.table_types import (
    ColumnKey,
    FilterState,
    ParsedTable,
    SortState,
    TableRow,
    VisibleColumns,
)

logger = logging.getLogger("document-renderer")


# ============================================================================
# Pipeline stages
# ============================================================================

def apply_filters(rows: Sequence[TableRow], filters: Optional[FilterState]) -> List[TableRow]:
    """Keep rows whose plain value is allowed for every filtered column.

    Args:
        rows: Input rows
        filters: Column -> allowed values; no active filters is identity

    Returns:
        New list of surviving rows, in input order
    """
    active = [(column, values) for column, values in (filters or {}).items() if values]
    if not active:
        return list(rows)

    return [
        row for row in rows
        if all(row.plain(column) in values for column, values in active)
    ]


def _row_columns(row: TableRow) -> Iterable[ColumnKey]:
    return range(len(row.cells))


def apply_search(
    rows: Sequence[TableRow],
    query: str,
    visible_columns: Optional[Iterable[ColumnKey]] = None,
) -> List[TableRow]:
    """Keep rows where any visible column contains query, case-insensitively.

    Args:
        rows: Input rows
        query: Search text; "" is identity
        visible_columns: Columns in search scope; None searches every cell

    Returns:
        New list of matching rows, in input order
    """
    if not query:
        return list(rows)

    needle = query.lower()
    scope = None if visible_columns is None else tuple(visible_columns)

    def matches(row: TableRow) -> bool:
        columns = _row_columns(row) if scope is None else scope
        return any(needle in row.plain(column).lower() for column in columns)

    return [row for row in rows if matches(row)]


def apply_sort(
    rows: Sequence[TableRow],
    column: Optional[ColumnKey],
    direction: SortDirection,
    locale: str = DEFAULT_COLLATION_LOCALE,
) -> List[TableRow]:
    """Sort rows by a column's plain value.

    Args:
        rows: Input rows
        column: Active column (None keeps order)
        direction: asc/desc; none keeps the current order
        locale: Collation locale

    Returns:
        New sorted list; rows with equal keys keep their relative order
    """
    if column is None or direction is SortDirection.NONE:
        return list(rows)

    return sorted(
        rows,
        key=lambda row: collation_key(row.plain(column), locale),
        reverse=direction is SortDirection.DESC,
    )


def filter_and_sort(
    rows: Sequence[TableRow],
    filters: Optional[FilterState],
    query: str,
    visible_columns: Optional[Iterable[ColumnKey]],
    sort_state: SortState,
    locale: str = DEFAULT_COLLATION_LOCALE,
) -> List[TableRow]:
    """Run the full pipeline: filter, then search, then sort."""
    result = apply_filters(rows, filters)
    result = apply_search(result, query, visible_columns)
    if not sort_state.is_active:
        return result
    return apply_sort(result, sort_state.column, sort_state.direction, locale)


# ============================================================================
# Unique-value index
# ============================================================================

def unique_values(
    rows: Sequence[TableRow],
    column: ColumnKey,
    locale: str = DEFAULT_COLLATION_LOCALE,
) -> List[str]:
    """Distinct non-empty plain values of a column, collation-sorted.

    Always pass the full unfiltered rows so filter options never shrink
    because of other active filters.
    """
    values = {row.plain(column) for row in rows}
    values.discard("")
    return sorted(values, key=lambda value: collation_key(value, locale))


def unique_values_map(
    table: ParsedTable,
    by_text: bool = False,
    locale: str = DEFAULT_COLLATION_LOCALE,
) -> Dict[ColumnKey, List[str]]:
    """Unique-value index for every column of a table.

    Args:
        table: Parsed table
        by_text: Key columns by header text instead of position
        locale: Collation locale for the value lists
    """
    index: Dict[ColumnKey, List[str]] = {}
    for header in table.headers:
        column: ColumnKey = header.text if by_text else header.col_index
        index[column] = unique_values(table.rows, column, locale)
    return index


# ============================================================================
# Copy-on-write state helpers
# ============================================================================

def toggle_filter(filters: FilterState, column: ColumnKey, value: str) -> Dict[ColumnKey, FrozenSet[str]]:
    """Add value to the column's set if absent, remove it if present."""
    current = filters.get(column, frozenset())
    return set_filter_value(filters, column, value, value not in current)


def set_filter_value(
    filters: FilterState,
    column: ColumnKey,
    value: str,
    checked: bool,
) -> Dict[ColumnKey, FrozenSet[str]]:
    """Return new filters with value included or excluded for column.

    A column whose set becomes empty is removed from the result.
    """
    updated = dict(filters)
    current = filters.get(column, frozenset())
    values = current | {value} if checked else current - {value}

    if values:
        updated[column] = frozenset(values)
    else:
        updated.pop(column, None)
    return updated


def active_filter_count(filters: FilterState) -> int:
    """Number of columns with at least one selected value."""
    return sum(1 for values in filters.values() if values)


def toggle_column(visible_columns: VisibleColumns, column: ColumnKey) -> FrozenSet[ColumnKey]:
    """Show a hidden column or hide a visible one.

    Hiding the last visible column is allowed here; controllers decide
    whether to reject it.
    """
    if column in visible_columns:
        return visible_columns - {column}
    return visible_columns | {column}


def next_sort_state(state: SortState, column: ColumnKey) -> SortState:
    """Advance the sort state for a header click.

    Clicking the active column cycles asc -> desc -> none -> asc; clicking
    any other column makes it active with asc.
    """
    if state.column != column:
        return SortState(column=column, direction=SortDirection.ASC)

    position = SORT_CYCLE.index(state.direction)
    return SortState(column=column, direction=SORT_CYCLE[(position + 1) % len(SORT_CYCLE)])


__all__ = [
    "apply_filters",
    "apply_search",
    "apply_sort",
    "filter_and_sort",
    "unique_values",
    "unique_values_map",
    "toggle_filter",
    "set_filter_value",
    "active_filter_count",
    "toggle_column",
    "next_sort_state",
]
