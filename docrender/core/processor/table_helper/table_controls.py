# docrender/core/processor/table_helper/table_controls.py
"""
Table Controls - Inline table view state

State container for a table rendered inline in a document. Cells are
parsed in plain mode and columns are identified by position.

Usage:
    controls = TableControls(table_html)
    controls.toggle_filter(1, "Eng")
    controls.sort_by(0)
    controls.type_search("ann")
    controls.tick()                 # from the host's timer/idle callback
    for row in controls.rows:
        ...
"""
import time
from dataclasses import dataclass
from typing import Callable, Optional

from docrender.core.processor.table_helper.table_session import TableSession, TableSessionConfig
from docrender.core.processor.table_helper.table_types import SortState


@dataclass
class TableControlsConfig(TableSessionConfig):
    """Configuration for inline table controls (see TableSessionConfig)."""
    pass


class TableControls(TableSession):
    """Inline table view: plain cells, position-keyed columns.

    Session state is reset whenever the bound markup changes.
    """

    rich = False

    def __init__(
        self,
        table_html: str = "",
        config: Optional[TableControlsConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize TableControls.

        Args:
            table_html: Table markup to bind
            config: Inline table configuration
            clock: Monotonic time source driving the search debounce
        """
        super().__init__(config or TableControlsConfig(), clock=clock)
        self._bind(table_html)

    def set_table_html(self, table_html: str) -> bool:
        """Bind new markup; re-parses and resets only when it changed."""
        return self._bind(table_html)

    def reset(self) -> None:
        """Clear search, sort and filters. Column visibility is kept."""
        self._debouncer.cancel()
        self._search_input = ""
        self._commit_search("")
        self._sort_state = SortState()
        self.clear_filters()

    @property
    def has_data(self) -> bool:
        """False for markup that parsed to no headers; render nothing then."""
        return bool(self.headers)


__all__ = [
    "TableControlsConfig",
    "TableControls",
]
