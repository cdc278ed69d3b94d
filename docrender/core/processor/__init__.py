"""
Processor - HTML walking and block handling

Module layout:
- render_nodes: NodeKind / RenderNode output model
- directives: [uic:...] / accordion patterns and marker constants
- block_handlers: tag and directive handler functions, TAG_HANDLERS
- tree_walker: TreeWalker, iter_nodes, parse_html_to_nodes

Helper subpackage:
- table_helper/: table parser, filter/sort/search engine, table controllers

Usage:
    from docrender.core.processor import parse_html_to_nodes
    from docrender.core.processor.table_helper import TableControls
"""

from docrender.core.processor.render_nodes import NodeKind, RenderNode, make_key
from docrender.core.processor.block_handlers import TAG_HANDLERS, WalkContext
from docrender.core.processor.tree_walker import (
    TreeWalker,
    TreeWalkerConfig,
    iter_nodes,
    parse_html_to_nodes,
)
from docrender.core.processor import table_helper

__all__ = [
    "NodeKind",
    "RenderNode",
    "make_key",
    "TAG_HANDLERS",
    "WalkContext",
    "TreeWalker",
    "TreeWalkerConfig",
    "iter_nodes",
    "parse_html_to_nodes",
    "table_helper",
]
