# docrender/core/processor/table_helper/table_session.py
"""
TableSession - Base class for table view state containers

Holds the per-view session state of one table view (filters, sort,
visible columns, debounced search) and wires it to the shared
filter/sort/search engine. The inline TableControls and the fullscreen
TableModal both derive from it and differ only in parse mode (plain vs.
rich cells) and lifecycle (bound to the inline node vs. open/close).
Both identify columns by position, so duplicate header texts never
collapse two columns into one.

Since both run the very same engine functions over equivalent rows, the
same content filtered or searched with the same query yields the same
result set in both presentations.

State updates are copy-on-write: every change replaces the filters /
visible-column / sort values with new immutable objects, which is what
the memoized derived values key on.
"""
import logging
import time
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, List, Mapping, Optional, Tuple

from docrender.core.functions.collation import DEFAULT_COLLATION_LOCALE
from docrender.core.functions.debounce import Debouncer
from docrender.core.functions.html_utils import DEFAULT_PARSER, SUPPORTED_PARSERS
from docrender.core.functions.memoize import MemoCell
from docrender.core.processor.table_helper.table_constants import (
    DEFAULT_SEARCH_DEBOUNCE_SECONDS,
    Alignment,
    SortDirection,
)
from docrender.core.processor.table_helper.table_filtering import (
    active_filter_count,
    filter_and_sort,
    next_sort_state,
    toggle_column,
    toggle_filter,
    set_filter_value,
    unique_values,
)
from docrender.core.processor.table_helper.table_highlight import highlight_html, highlight_text
from docrender.core.processor.table_helper.table_parser import parse_table
from docrender.core.processor.table_helper.table_types import (
    EMPTY_TABLE,
    ColumnKey,
    DisplayCell,
    ParsedTable,
    SortState,
    TableHeader,
    TableRow,
)

logger = logging.getLogger("document-renderer")


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class TableSessionConfig:
    """Configuration shared by table view controllers.

    Attributes:
        search_debounce_seconds: Trailing-edge quiet window for typed search
        allow_hide_all_columns: Whether hiding the last visible column is allowed
        highlight_matches: Whether display cells wrap search matches in <mark>
        highlight_class: Optional class name for <mark> elements
        empty_cell_placeholder: Text shown for empty cells ("" to show nothing)
        collation_locale: Locale used to sort rows and filter values
        parser: BeautifulSoup tree builder name
    """
    search_debounce_seconds: float = DEFAULT_SEARCH_DEBOUNCE_SECONDS
    allow_hide_all_columns: bool = False
    highlight_matches: bool = True
    highlight_class: Optional[str] = None
    empty_cell_placeholder: str = ""
    collation_locale: str = DEFAULT_COLLATION_LOCALE
    parser: str = DEFAULT_PARSER

    def __post_init__(self):
        if self.search_debounce_seconds < 0:
            raise ValueError(
                f"search_debounce_seconds must be >= 0, got {self.search_debounce_seconds}"
            )
        if self.parser not in SUPPORTED_PARSERS:
            raise ValueError(f"Unsupported parser: {self.parser!r}")
        if not isinstance(self.collation_locale, str) or not self.collation_locale.strip():
            raise ValueError(f"collation_locale must be a non-empty string, got {self.collation_locale!r}")


# ============================================================================
# Base class
# ============================================================================

class TableSession:
    """Session state of one table view over the shared engine.

    Attributes:
        config: Session configuration
        show_filters: Whether the filter panel is expanded
        show_columns: Whether the column panel is expanded
    """

    rich: bool = False

    def __init__(
        self,
        config: Optional[TableSessionConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or TableSessionConfig()
        self._logger = logging.getLogger(f"document-renderer.{self.__class__.__name__}")

        self._table_html: Optional[str] = None
        self._table: ParsedTable = EMPTY_TABLE
        self._search_input = ""
        self._search_query = ""
        self._filters: Mapping[ColumnKey, FrozenSet[str]] = MappingProxyType({})
        self._sort_state = SortState()
        self._visible_columns: FrozenSet[ColumnKey] = frozenset()

        self._debouncer: Debouncer[str] = Debouncer(
            self._commit_search,
            delay=self.config.search_debounce_seconds,
            clock=clock,
        )
        self._parse_memo: MemoCell[ParsedTable] = MemoCell(self._parse)
        self._rows_memo: MemoCell[List[TableRow]] = MemoCell(filter_and_sort)
        self._unique_memo: MemoCell[Dict[ColumnKey, List[str]]] = MemoCell(self._build_unique_index)

        self.show_filters = False
        self.show_columns = False

    # ========================================================================
    # Subclass hooks
    # ========================================================================

    def column_key(self, header: TableHeader) -> ColumnKey:
        """Column identity used by this view for a header."""
        return header.col_index

    def _parse(self, table_html: str) -> ParsedTable:
        return parse_table(table_html, rich=self.rich, parser=self.config.parser)

    # ========================================================================
    # Table binding
    # ========================================================================

    def _bind(self, table_html: str) -> bool:
        """Bind markup, re-parsing and resetting state only when it changed.

        Returns:
            True if the markup changed
        """
        table_html = table_html or ""
        if self._table_html is not None and table_html == self._table_html:
            return False

        previous_headers = self._table.headers
        self._table_html = table_html
        self._table = self._parse_memo.get(table_html)
        self._reset_session()
        if self._table.headers != previous_headers:
            self._logger.debug("Table structure changed: %d columns", len(self._table.headers))
        return True

    def _unbind(self) -> None:
        self._table_html = None
        self._table = EMPTY_TABLE
        self._parse_memo.invalidate()
        self._reset_session()

    def _reset_session(self) -> None:
        self._debouncer.cancel()
        self._search_input = ""
        self._search_query = ""
        self._filters = MappingProxyType({})
        self._sort_state = SortState()
        self._visible_columns = frozenset(self.column_keys)
        self.show_filters = False
        self.show_columns = False

    # ========================================================================
    # Read-only state
    # ========================================================================

    @property
    def table(self) -> ParsedTable:
        return self._table

    @property
    def table_html(self) -> str:
        return self._table_html or ""

    @property
    def headers(self) -> Tuple[TableHeader, ...]:
        return self._table.headers

    @property
    def column_keys(self) -> Tuple[ColumnKey, ...]:
        return tuple(self.column_key(header) for header in self._table.headers)

    @property
    def filters(self) -> Mapping[ColumnKey, FrozenSet[str]]:
        return self._filters

    @property
    def sort_state(self) -> SortState:
        return self._sort_state

    @property
    def visible_columns(self) -> FrozenSet[ColumnKey]:
        return self._visible_columns

    @property
    def visible_headers(self) -> List[TableHeader]:
        return [h for h in self._table.headers if self.column_key(h) in self._visible_columns]

    @property
    def search_input(self) -> str:
        """Latest typed search text (may not be applied yet)."""
        return self._search_input

    @property
    def search_query(self) -> str:
        """Search text currently applied to the rows."""
        return self._search_query

    @property
    def active_filter_count(self) -> int:
        return active_filter_count(self._filters)

    # ========================================================================
    # Search
    # ========================================================================

    def type_search(self, text: str) -> None:
        """Record a keystroke; the query applies after the debounce window."""
        self._search_input = text
        self._debouncer.push(text)

    def tick(self) -> bool:
        """Pump the search debouncer.

        Returns:
            True if a pending query was applied
        """
        return self._debouncer.tick()

    def flush_search(self) -> bool:
        return self._debouncer.flush()

    def set_search_query(self, query: str) -> None:
        """Apply a query immediately, bypassing the debounce window."""
        self._debouncer.cancel()
        self._search_input = query
        self._commit_search(query)

    def _commit_search(self, query: str) -> None:
        self._search_query = query or ""

    # ========================================================================
    # Filters / columns / sort
    # ========================================================================

    def toggle_filter(self, column: ColumnKey, value: str) -> None:
        self._filters = MappingProxyType(toggle_filter(self._filters, column, value))

    def set_filter(self, column: ColumnKey, value: str, checked: bool) -> None:
        self._filters = MappingProxyType(set_filter_value(self._filters, column, value, checked))

    def clear_filters(self) -> None:
        self._filters = MappingProxyType({})

    def toggle_column(self, column: ColumnKey) -> bool:
        """Show or hide a column.

        Returns:
            False if the change was rejected (hiding the last visible column
            while allow_hide_all_columns is off)
        """
        updated = toggle_column(self._visible_columns, column)
        if not updated and not self.config.allow_hide_all_columns:
            self._logger.warning("Refusing to hide the last visible column: %r", column)
            return False
        self._visible_columns = frozenset(updated)
        return True

    def show_all_columns(self) -> None:
        self._visible_columns = frozenset(self.column_keys)

    def sort_by(self, column: ColumnKey) -> SortState:
        """Handle a header click (tri-state cycle)."""
        self._sort_state = next_sort_state(self._sort_state, column)
        return self._sort_state

    def sort_indicator(self, column: ColumnKey) -> SortDirection:
        """Direction shown on a column header's sort icon."""
        return self._sort_state.direction_for(column)

    def toggle_filters_panel(self) -> bool:
        self.show_filters = not self.show_filters
        return self.show_filters

    def toggle_columns_panel(self) -> bool:
        self.show_columns = not self.show_columns
        return self.show_columns

    # ========================================================================
    # Derived values
    # ========================================================================

    @property
    def rows(self) -> List[TableRow]:
        """Filtered, searched and sorted view over the parsed rows."""
        return self._rows_memo.get(
            self._table.rows,
            self._filters,
            self._search_query,
            self._visible_columns,
            self._sort_state,
            self.config.collation_locale,
        )

    def _build_unique_index(self, table: ParsedTable, locale: str) -> Dict[ColumnKey, List[str]]:
        return {
            self.column_key(header): unique_values(table.rows, self.column_key(header), locale)
            for header in table.headers
        }

    def unique_values_map(self) -> Dict[ColumnKey, List[str]]:
        """Selectable filter values per column, from the full unfiltered rows."""
        return self._unique_memo.get(self._table, self.config.collation_locale)

    def unique_values(self, column: ColumnKey) -> List[str]:
        return self.unique_values_map().get(column, [])

    def _cell_html(self, row: TableRow, column: ColumnKey) -> str:
        query = self._search_query if self.config.highlight_matches else ""
        value = row.value(column)
        if not value:
            return self.config.empty_cell_placeholder
        if row.rich:
            return highlight_html(value, query, css_class=self.config.highlight_class,
                                  parser=self.config.parser)
        return highlight_text(value, query, css_class=self.config.highlight_class)

    def display_rows(self) -> List[List[DisplayCell]]:
        """Visible cells of the current rows, rendered for display.

        Highlighting runs on a fresh copy of each value per call; the
        stored cell values are untouched.
        """
        visible = self.visible_headers
        result = []
        for row in self.rows:
            cells = []
            for header in visible:
                column = self.column_key(header)
                alignment = row.alignment(header.col_index)
                if alignment is Alignment.NONE:
                    alignment = header.alignment
                cells.append(DisplayCell(column=column, html=self._cell_html(row, column),
                                         alignment=alignment))
            result.append(cells)
        return result


__all__ = [
    "TableSessionConfig",
    "TableSession",
]
