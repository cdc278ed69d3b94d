# docrender/core/processor/tree_walker.py
"""
Tree Walker - Sanitized HTML to RenderNode sequence

Recursive descent over the DOM child nodes of an already-sanitized HTML
fragment, dispatching each element through a tag -> handler table.

Dispatch order per node:
1. Text node -> TEXT leaf, unless whitespace-only
2. <p> -> accordion directive, else [uic:...] directive, else PARAGRAPH
3. Reserved marker element (alert / math / diagram) -> its block handler
4. Registered tag handler
5. Anything else -> recurse into its children (content is never dropped)

The walk is a pure transform: no shared counters, no side effects. Keys
are position paths passed down the recursion ("0", "2-1", ...), so the
output for a given input is always identical.

Usage:
    from docrender.core.processor.tree_walker import parse_html_to_nodes

    nodes = parse_html_to_nodes(sanitized_html)
    for node in nodes:
        print(node.kind, node.key)
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from bs4 import Tag
from bs4.element import PageElement

from docrender.core.functions.html_utils import (
    DEFAULT_PARSER,
    SUPPORTED_PARSERS,
    is_element,
    is_text_node,
    parse_fragment,
)
from docrender.core.processor.block_handlers import (
    DEFAULT_CODE_LANGUAGE,
    TAG_HANDLERS,
    Handler,
    WalkContext,
    handle_marker,
    handle_paragraph,
    handle_text,
    handle_ui_component,
)
from docrender.core.processor.directives import (
    is_accordion_marker,
    match_accordion_title,
    match_ui_component,
)
from docrender.core.processor.render_nodes import NodeKind, RenderNode, make_key

logger = logging.getLogger("document-renderer")


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class TreeWalkerConfig:
    """Configuration for the tree walker.

    Attributes:
        parser: BeautifulSoup tree builder name
        default_code_language: Language for code blocks that declare none
        handlers: Extra or overriding tag handlers, merged over TAG_HANDLERS
    """
    parser: str = DEFAULT_PARSER
    default_code_language: str = DEFAULT_CODE_LANGUAGE
    handlers: Dict[str, Handler] = field(default_factory=dict)

    def __post_init__(self):
        if self.parser not in SUPPORTED_PARSERS:
            raise ValueError(f"Unsupported parser: {self.parser!r}")


# ============================================================================
# Tree Walker
# ============================================================================

class TreeWalker:
    """Converts sanitized HTML into an ordered sequence of RenderNodes."""

    def __init__(self, config: Optional[TreeWalkerConfig] = None):
        self.config = config or TreeWalkerConfig()
        self._handlers: Dict[str, Handler] = {**TAG_HANDLERS, **self.config.handlers}
        self._logger = logging.getLogger(f"document-renderer.{self.__class__.__name__}")

    def iter_nodes(self, html: str) -> Iterator[RenderNode]:
        """Lazily walk html; the returned iterator can be consumed once."""
        soup = parse_fragment(html, self.config.parser)
        context = WalkContext(
            walk=self._walk_list,
            default_code_language=self.config.default_code_language,
            parser=self.config.parser,
        )
        yield from self._walk(list(soup.children), "", context)

    def walk(self, html: str) -> List[RenderNode]:
        return list(self.iter_nodes(html))

    # ========================================================================
    # Recursion
    # ========================================================================

    def _walk_list(self, siblings: Sequence[PageElement], parent_key: str) -> List[RenderNode]:
        context = WalkContext(
            walk=self._walk_list,
            default_code_language=self.config.default_code_language,
            parser=self.config.parser,
        )
        return list(self._walk(list(siblings), parent_key, context))

    def _walk(
        self,
        siblings: List[PageElement],
        parent_key: str,
        context: WalkContext,
    ) -> Iterator[RenderNode]:
        index = 0
        while index < len(siblings):
            node = siblings[index]
            key = make_key(parent_key, index)

            if is_text_node(node):
                yield from handle_text(str(node), key)
                index += 1
                continue

            if not is_element(node):
                # comments, doctypes, processing instructions
                index += 1
                continue

            if node.name == "p":
                nodes, index = self._walk_paragraph(siblings, index, key, context)
                yield from nodes
                continue

            yield from self._dispatch(node, key, context)
            index += 1

    def _dispatch(self, element: Tag, key: str, context: WalkContext) -> List[RenderNode]:
        marker_nodes = handle_marker(element, key, context)
        if marker_nodes is not None:
            return marker_nodes

        handler = self._handlers.get(element.name)
        if handler is not None:
            return handler(element, key, context)

        self._logger.debug("No handler for <%s> at %s, walking children", element.name, key)
        return self._walk_list(list(element.children), key)

    # ========================================================================
    # Paragraph directives
    # ========================================================================

    def _walk_paragraph(
        self,
        siblings: List[PageElement],
        index: int,
        key: str,
        context: WalkContext,
    ) -> Tuple[List[RenderNode], int]:
        """Render the paragraph at index.

        Returns:
            (nodes, index of the next sibling to walk)
        """
        element = siblings[index]
        text = element.get_text()

        if is_accordion_marker(text):
            return self._collect_accordion(siblings, index, key)

        component_id = match_ui_component(text)
        if component_id is not None:
            self._logger.debug("UI component directive %r at %s", component_id, key)
            return handle_ui_component(key, component_id), index + 1

        return handle_paragraph(element, key, context), index + 1

    def _collect_accordion(
        self,
        siblings: List[PageElement],
        index: int,
        key: str,
    ) -> Tuple[List[RenderNode], int]:
        """Gather the siblings after an accordion opener into one node.

        Content runs until the next paragraph starting with the accordion
        marker. A bare closing marker is consumed; another opener is left
        for the caller to walk.
        """
        title = match_accordion_title(siblings[index].get_text())
        if title is None:
            # stray closing marker
            return [], index + 1

        end = index + 1
        while end < len(siblings):
            sibling = siblings[end]
            if isinstance(sibling, Tag) and sibling.name == "p" and is_accordion_marker(sibling.get_text()):
                break
            end += 1

        children = self._walk_list(siblings[index + 1:end], key)
        next_index = end
        if end < len(siblings) and match_accordion_title(siblings[end].get_text()) is None:
            next_index = end + 1

        node = RenderNode(NodeKind.ACCORDION, key, text=title, children=children,
                          data={"title": title})
        return [node], next_index


# ============================================================================
# Module-level helpers
# ============================================================================

def iter_nodes(html: str, config: Optional[TreeWalkerConfig] = None) -> Iterator[RenderNode]:
    return TreeWalker(config).iter_nodes(html)


def parse_html_to_nodes(html: str, config: Optional[TreeWalkerConfig] = None) -> List[RenderNode]:
    """Convert sanitized HTML into a list of RenderNodes.

    Args:
        html: Sanitized HTML fragment
        config: Walker configuration

    Returns:
        Ordered render nodes; rebuilt from scratch on every call
    """
    return TreeWalker(config).walk(html)


__all__ = [
    "TreeWalkerConfig",
    "TreeWalker",
    "iter_nodes",
    "parse_html_to_nodes",
]
