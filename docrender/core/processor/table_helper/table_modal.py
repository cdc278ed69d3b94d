# docrender/core/processor/table_helper/table_modal.py
"""
Table Modal - Fullscreen table view controller

Fullscreen variant of the table view. It parses the same markup as the
inline view, in rich mode so inline formatting survives. Columns are
keyed by position exactly as in the inline view, and its
filter/sort/search/visibility state is independent of the inline view's.
It runs the same engine functions, so equal content and queries give
equal result sets.

Lifecycle:
- open(table_html): bind the markup, reset session state, attach a
  "keydown" listener (Escape closes) and a "pointerdown" listener
  (a click on the backdrop closes) to the host EventTarget
- close(): detach both listeners, discard session state, notify on_close
- opened(table_html): context manager pairing open() with close()

Usage:
    events = EventTarget()
    modal = TableModal(events, on_close=lambda: ...)
    with modal.opened(table_html):
        modal.set_filter(1, "Eng", True)
        modal.display_rows()
"""
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from docrender.core.functions.events import EventTarget, UIEvent
from docrender.core.processor.table_helper.table_constants import EMPTY_CELL_PLACEHOLDER
from docrender.core.processor.table_helper.table_session import TableSession, TableSessionConfig

KEYDOWN_EVENT = "keydown"
POINTERDOWN_EVENT = "pointerdown"
ESCAPE_KEY = "Escape"
BACKDROP_TARGET = "backdrop"


@dataclass
class TableModalConfig(TableSessionConfig):
    """Configuration for the fullscreen table.

    Attributes:
        close_on_escape: Close when Escape is pressed
        close_on_backdrop: Close when the backdrop is clicked
    """
    empty_cell_placeholder: str = EMPTY_CELL_PLACEHOLDER
    close_on_escape: bool = True
    close_on_backdrop: bool = True


class TableModal(TableSession):
    """Fullscreen table view: rich cells, position-keyed columns.

    Columns are keyed by position so tables with duplicate header texts
    keep every column.
    """

    rich = True

    def __init__(
        self,
        events: EventTarget,
        config: Optional[TableModalConfig] = None,
        on_close: Optional[Callable[[], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize TableModal.

        Args:
            events: Host event target receiving the global listeners
            config: Fullscreen table configuration
            on_close: Called after the modal closes
            clock: Monotonic time source driving the search debounce
        """
        super().__init__(config or TableModalConfig(), clock=clock)
        self._events = events
        self._on_close = on_close
        self._is_open = False

    @property
    def is_open(self) -> bool:
        return self._is_open

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def open(self, table_html: str) -> None:
        """Show the table fullscreen with fresh session state."""
        if self._is_open:
            if self._bind(table_html):
                self._logger.debug("Fullscreen table markup replaced while open")
            return

        self._unbind()
        self._bind(table_html)
        self._events.add_listener(KEYDOWN_EVENT, self._handle_keydown)
        self._events.add_listener(POINTERDOWN_EVENT, self._handle_pointerdown)
        self._is_open = True
        self._logger.debug("Fullscreen table opened: %d columns, %d rows",
                           len(self.headers), len(self.table.rows))

    def close(self) -> None:
        """Detach listeners and discard session state. Closing twice is harmless."""
        if not self._is_open:
            return

        self._events.remove_listener(KEYDOWN_EVENT, self._handle_keydown)
        self._events.remove_listener(POINTERDOWN_EVENT, self._handle_pointerdown)
        self._is_open = False
        self._unbind()
        self._logger.debug("Fullscreen table closed")

        if self._on_close is not None:
            self._on_close()

    @contextmanager
    def opened(self, table_html: str) -> Iterator["TableModal"]:
        """Scope the modal (and its listeners) to a with-block."""
        self.open(table_html)
        try:
            yield self
        finally:
            self.close()

    def _handle_keydown(self, event: UIEvent) -> None:
        if self.config.close_on_escape and event.key == ESCAPE_KEY:
            self.close()

    def _handle_pointerdown(self, event: UIEvent) -> None:
        if self.config.close_on_backdrop and event.target == BACKDROP_TARGET:
            self.close()

    # ========================================================================
    # Actions
    # ========================================================================

    def reset_filters(self) -> None:
        """Clear filters and search. Sort and column visibility are kept."""
        self.clear_filters()
        self.set_search_query("")


__all__ = [
    "KEYDOWN_EVENT",
    "POINTERDOWN_EVENT",
    "ESCAPE_KEY",
    "BACKDROP_TARGET",
    "TableModalConfig",
    "TableModal",
]
