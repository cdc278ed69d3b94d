# docrender/core/processor/render_nodes.py
"""
Render Nodes - Output of the HTML tree walker

A RenderNode is a host-neutral description of one renderable block or
inline element. The hosting UI maps NodeKind to its own widgets;
diagrams, formulas and UI-component embeds are only described here and
rendered later by external collaborators.

Keys are structural: the position path of the source node
("0", "3-1", ...), so the same input always yields the same keys.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional


class NodeKind(str, Enum):
    TEXT = "text"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    LIST = "list"
    LINK = "link"
    IMAGE = "image"
    FIGURE = "figure"
    BLOCKQUOTE = "blockquote"
    TABLE = "table"
    HORIZONTAL_RULE = "hr"
    LINE_BREAK = "br"
    CODE_BLOCK = "code_block"
    INLINE_CODE = "inline_code"
    INLINE = "inline"              # strong / em / u / s / sub / sup
    ALERT = "alert"
    MATH = "math"
    DIAGRAM = "diagram"
    UI_COMPONENT = "ui_component"
    ACCORDION = "accordion"


@dataclass
class RenderNode:
    """One renderable node.

    Attributes:
        kind: Node type
        key: Structural position key
        tag: Source tag name where meaningful (h2, ul, strong, ...)
        text: Literal text (text nodes, code, captions)
        html: Inner markup to render as-is (already sanitized upstream)
        attrs: Element attributes carried over (href, src, id, ...)
        children: Nested nodes (alerts, accordions)
        data: Kind-specific payload (alert kind, formula, parsed table, ...)
    """
    kind: NodeKind
    key: str
    tag: Optional[str] = None
    text: Optional[str] = None
    html: Optional[str] = None
    attrs: Dict[str, str] = field(default_factory=dict)
    children: List["RenderNode"] = field(default_factory=list)
    data: Dict[str, Any] = field(default_factory=dict)

    def iter_tree(self) -> Iterator["RenderNode"]:
        """Yield this node and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.iter_tree()

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"kind": self.kind.value, "key": self.key}
        for name in ("tag", "text", "html"):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        if self.attrs:
            result["attrs"] = dict(self.attrs)
        if self.data:
            result["data"] = {
                k: (v.to_dict() if hasattr(v, "to_dict") else v) for k, v in self.data.items()
            }
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


def make_key(parent_key: str, index: int) -> str:
    """Structural key for the index-th child of parent_key."""
    return f"{parent_key}-{index}" if parent_key else str(index)


__all__ = [
    "NodeKind",
    "RenderNode",
    "make_key",
]
