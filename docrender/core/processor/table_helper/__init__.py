# docrender/core/processor/table_helper/__init__.py
"""
Table Helper Module

Table parsing and the interactive table engine used by the HTML walker.

Module layout:
- table_constants: Alignment, SortDirection and defaults
- table_types: TableHeader, TableRow, ParsedTable, SortState, DisplayCell
- table_parser: <table> markup -> ParsedTable (plain / rich)
- table_filtering: filter -> search -> sort pipeline, unique values,
  copy-on-write state helpers
- table_highlight: render-only <mark> highlighting of search matches
- table_session: TableSession base (shared session state + engine wiring)
- table_controls: TableControls, the inline table view
- table_modal: TableModal, the fullscreen table view
"""

# Constants
from docrender.core.processor.table_helper.table_constants import (
    Alignment,
    SortDirection,
    SORT_CYCLE,
    DEFAULT_SEARCH_DEBOUNCE_SECONDS,
    EMPTY_CELL_PLACEHOLDER,
)

# Types
from docrender.core.processor.table_helper.table_types import (
    ColumnKey,
    FilterState,
    VisibleColumns,
    TableHeader,
    TableRow,
    ParsedTable,
    SortState,
    DisplayCell,
    EMPTY_TABLE,
)

# Parser
from docrender.core.processor.table_helper.table_parser import (
    detect_alignment,
    parse_table,
    parse_table_element,
)

# Engine
from docrender.core.functions.collation import DEFAULT_COLLATION_LOCALE, collation_key
from docrender.core.processor.table_helper.table_filtering import (
    apply_filters,
    apply_search,
    apply_sort,
    filter_and_sort,
    unique_values,
    unique_values_map,
    toggle_filter,
    set_filter_value,
    active_filter_count,
    toggle_column,
    next_sort_state,
)

# Highlighting
from docrender.core.processor.table_helper.table_highlight import (
    TextPart,
    split_text_by_query,
    highlight_html,
    highlight_text,
)

# Controllers
from docrender.core.processor.table_helper.table_session import (
    TableSession,
    TableSessionConfig,
)
from docrender.core.processor.table_helper.table_controls import (
    TableControls,
    TableControlsConfig,
)
from docrender.core.processor.table_helper.table_modal import (
    TableModal,
    TableModalConfig,
)

__all__ = [
    # Constants
    "Alignment",
    "SortDirection",
    "SORT_CYCLE",
    "DEFAULT_SEARCH_DEBOUNCE_SECONDS",
    "EMPTY_CELL_PLACEHOLDER",
    # Types
    "ColumnKey",
    "FilterState",
    "VisibleColumns",
    "TableHeader",
    "TableRow",
    "ParsedTable",
    "SortState",
    "DisplayCell",
    "EMPTY_TABLE",
    # Parser
    "detect_alignment",
    "parse_table",
    "parse_table_element",
    # Engine
    "DEFAULT_COLLATION_LOCALE",
    "collation_key",
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
    # Highlighting
    "TextPart",
    "split_text_by_query",
    "highlight_html",
    "highlight_text",
    # Controllers
    "TableSession",
    "TableSessionConfig",
    "TableControls",
    "TableControlsConfig",
    "TableModal",
    "TableModalConfig",
]
