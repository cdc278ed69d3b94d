# docrender/core/document_renderer.py
"""
DocumentRenderer - Entry point tying the walker and table views together

Renders sanitized document HTML into RenderNodes and creates the inline
and fullscreen table views for table nodes.

Usage:
    renderer = DocumentRenderer()
    nodes = renderer.render(sanitized_html)

    table_node = next(n for n in nodes if n.kind is NodeKind.TABLE)
    controls = renderer.table_controls(table_node)

    events = EventTarget()
    with renderer.fullscreen(table_node, events) as modal:
        modal.set_search_query("eng")
"""
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Union

from docrender.core.functions.collation import DEFAULT_COLLATION_LOCALE
from docrender.core.functions.events import EventTarget
from docrender.core.functions.html_utils import DEFAULT_PARSER, SUPPORTED_PARSERS
from docrender.core.processor.block_handlers import DEFAULT_CODE_LANGUAGE
from docrender.core.processor.render_nodes import NodeKind, RenderNode
from docrender.core.processor.table_helper.table_controls import TableControls, TableControlsConfig
from docrender.core.processor.table_helper.table_modal import TableModal, TableModalConfig
from docrender.core.processor.tree_walker import TreeWalker, TreeWalkerConfig

logger = logging.getLogger("document-renderer")

TableSource = Union[RenderNode, str]


@dataclass
class RendererConfig:
    """Top-level configuration.

    Attributes:
        parser: BeautifulSoup tree builder name used everywhere
        default_code_language: Language for code blocks that declare none
        collation_locale: Locale used by both table views to sort values
        table: Inline table configuration
        modal: Fullscreen table configuration
    """
    parser: str = DEFAULT_PARSER
    default_code_language: str = DEFAULT_CODE_LANGUAGE
    collation_locale: str = DEFAULT_COLLATION_LOCALE
    table: TableControlsConfig = field(default_factory=TableControlsConfig)
    modal: TableModalConfig = field(default_factory=TableModalConfig)

    def __post_init__(self):
        if self.parser not in SUPPORTED_PARSERS:
            raise ValueError(f"Unsupported parser: {self.parser!r}")
        if not isinstance(self.collation_locale, str) or not self.collation_locale.strip():
            raise ValueError(f"collation_locale must be a non-empty string, got {self.collation_locale!r}")
        for view_config in (self.table, self.modal):
            view_config.parser = self.parser
            view_config.collation_locale = self.collation_locale


class DocumentRenderer:
    """Renders sanitized HTML and builds table views for table nodes."""

    def __init__(
        self,
        config: Optional[RendererConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize DocumentRenderer.

        Args:
            config: Renderer configuration
            clock: Monotonic time source for search debouncing
        """
        self.config = config or RendererConfig()
        self._clock = clock
        self._walker = TreeWalker(
            TreeWalkerConfig(
                parser=self.config.parser,
                default_code_language=self.config.default_code_language,
            )
        )
        self._logger = logging.getLogger(f"document-renderer.{self.__class__.__name__}")

    def iter_nodes(self, html: str) -> Iterator[RenderNode]:
        return self._walker.iter_nodes(html)

    def render(self, html: str) -> List[RenderNode]:
        """Render sanitized HTML into an ordered list of nodes."""
        nodes = self._walker.walk(html)
        self._logger.debug("Rendered %d top-level nodes", len(nodes))
        return nodes

    @staticmethod
    def _table_html(source: TableSource) -> str:
        if isinstance(source, RenderNode):
            if source.kind is not NodeKind.TABLE:
                raise ValueError(f"Expected a table node, got {source.kind.value!r}")
            return source.html or ""
        return source

    def table_controls(self, source: TableSource) -> TableControls:
        """Create the inline table view for a table node or table markup."""
        return TableControls(self._table_html(source), config=self.config.table, clock=self._clock)

    def create_modal(
        self,
        events: EventTarget,
        on_close: Optional[Callable[[], None]] = None,
    ) -> TableModal:
        return TableModal(events, config=self.config.modal, on_close=on_close, clock=self._clock)

    @contextmanager
    def fullscreen(
        self,
        source: TableSource,
        events: EventTarget,
        on_close: Optional[Callable[[], None]] = None,
    ) -> Iterator[TableModal]:
        """Open a fullscreen table view for the duration of a with-block."""
        modal = self.create_modal(events, on_close=on_close)
        with modal.opened(self._table_html(source)):
            yield modal


__all__ = [
    "RendererConfig",
    "DocumentRenderer",
]
