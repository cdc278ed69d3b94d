"""
docrender

Renders sanitized document HTML (from Markdown) into renderable nodes and
drives interactive tables: parsing, filtering, sorting, search and
column visibility, inline and fullscreen.

Package layout:
- core: rendering core
    - DocumentRenderer: main entry point
    - processor: tree walker, block handlers, table_helper
    - functions: html utilities, debouncer, memoization, events

Usage:
    from docrender import DocumentRenderer, NodeKind

    renderer = DocumentRenderer()
    nodes = renderer.render(sanitized_html)
"""

__version__ = "1.0.0"

from docrender.core import DocumentRenderer, RendererConfig
from docrender.core.functions.events import EventTarget, UIEvent
from docrender.core.processor.render_nodes import NodeKind, RenderNode
from docrender.core.processor.table_helper import (
    ParsedTable,
    SortDirection,
    SortState,
    TableControls,
    TableModal,
    parse_table,
)

from docrender import core

__all__ = [
    "__version__",
    "DocumentRenderer",
    "RendererConfig",
    "EventTarget",
    "UIEvent",
    "NodeKind",
    "RenderNode",
    "ParsedTable",
    "SortDirection",
    "SortState",
    "TableControls",
    "TableModal",
    "parse_table",
    "core",
]
