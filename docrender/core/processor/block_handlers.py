# docrender/core/processor/block_handlers.py
"""
Block Handlers - Tag and directive handlers for the tree walker

Each handler is a plain function

    handler(element, key, context) -> List[RenderNode]

registered by tag name in TAG_HANDLERS. Handlers never raise for
unexpected but well-formed markup; they read what is there and fall back
to defaults. Handlers that contain nested document content (alerts)
walk it through context.walk so their children get structural keys
under the handler's own key.
"""
import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from bs4 import Tag
from bs4.element import PageElement

from docrender.core.functions.html_utils import (
    DEFAULT_PARSER,
    class_list,
    get_attr,
    inner_html,
    is_text_node,
    outer_html,
)
from docrender.core.processor.directives import (
    ALERT_KINDS,
    DIAGRAM_LANGUAGES,
    MATH_LANGUAGES,
    alert_kind,
    diagram_source,
    math_source,
)
from docrender.core.processor.render_nodes import NodeKind, RenderNode
from docrender.core.processor.table_helper.table_parser import parse_table_element

logger = logging.getLogger("document-renderer")

DEFAULT_CODE_LANGUAGE = "bash"
DEFAULT_IMAGE_ALT = "Image"
DEFAULT_LINK_HREF = "#"

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
INLINE_TAGS = ("strong", "b", "em", "i", "u", "s", "del", "strike", "sub", "sup")

_LANGUAGE_CLASS_PREFIX = "language-"
_TASK_PREFIX = re.compile(r"^\[([ xX])\]\s")


@dataclass
class WalkContext:
    """State handed to every handler.

    Attributes:
        walk: Walks a sibling sequence under a parent key
        default_code_language: Language for code blocks without one
        parser: BeautifulSoup tree builder name
    """
    walk: Callable[[Sequence[PageElement], str], List[RenderNode]]
    default_code_language: str = DEFAULT_CODE_LANGUAGE
    parser: str = DEFAULT_PARSER


Handler = Callable[[Tag, str, WalkContext], List[RenderNode]]


# ============================================================================
# Text blocks
# ============================================================================

def handle_text(text: str, key: str) -> List[RenderNode]:
    """Literal text leaf; whitespace-only text produces nothing."""
    if not text.strip():
        return []
    return [RenderNode(NodeKind.TEXT, key, text=text)]


def handle_paragraph(element: Tag, key: str, context: WalkContext) -> List[RenderNode]:
    return [RenderNode(NodeKind.PARAGRAPH, key, tag="p", html=inner_html(element))]


def handle_heading(element: Tag, key: str, context: WalkContext) -> List[RenderNode]:
    attrs = {}
    element_id = get_attr(element, "id")
    if element_id:
        attrs["id"] = element_id
    return [
        RenderNode(
            NodeKind.HEADING,
            key,
            tag=element.name,
            html=inner_html(element),
            attrs=attrs,
            data={"level": int(element.name[1])},
        )
    ]


def handle_blockquote(element: Tag, key: str, context: WalkContext) -> List[RenderNode]:
    return [RenderNode(NodeKind.BLOCKQUOTE, key, tag="blockquote", html=inner_html(element))]


def handle_inline(element: Tag, key: str, context: WalkContext) -> List[RenderNode]:
    """Emphasis-style inline elements (strong, em, u, s, sub, sup, ...)."""
    return [RenderNode(NodeKind.INLINE, key, tag=element.name, html=inner_html(element))]


def handle_hr(element: Tag, key: str, context: WalkContext) -> List[RenderNode]:
    return [RenderNode(NodeKind.HORIZONTAL_RULE, key, tag="hr")]


def handle_br(element: Tag, key: str, context: WalkContext) -> List[RenderNode]:
    return [RenderNode(NodeKind.LINE_BREAK, key, tag="br")]


# ============================================================================
# Lists
# ============================================================================

def _first_content(element: Tag) -> Optional[PageElement]:
    for child in element.children:
        if isinstance(child, Tag):
            return child
        if is_text_node(child) and child.strip():
            return child
    return None


def _detect_task(item: Tag):
    """Return (is_task, checked) for a list item.

    A task item starts with a checkbox input (possibly inside a leading
    paragraph) or with a literal "[ ]" / "[x]" prefix.
    """
    first = _first_content(item)
    if isinstance(first, Tag) and first.name == "p":
        first = _first_content(first)

    if isinstance(first, Tag) and first.name == "input":
        if (get_attr(first, "type") or "").lower() == "checkbox":
            return True, first.has_attr("checked")
        return False, False

    match = _TASK_PREFIX.match(item.get_text().lstrip())
    if match:
        return True, match.group(1).lower() == "x"
    return False, False


def handle_list(element: Tag, key: str, context: WalkContext) -> List[RenderNode]:
    items = []
    for item in element.find_all("li", recursive=False):
        is_task, checked = _detect_task(item)
        items.append({"html": inner_html(item), "task": is_task, "checked": checked})

    data = {"ordered": element.name == "ol", "items": items}
    start = get_attr(element, "start")
    if element.name == "ol" and start and start.strip().lstrip("-").isdigit():
        data["start"] = int(start)
    if any(item["task"] for item in items):
        data["task_list"] = True

    return [RenderNode(NodeKind.LIST, key, tag=element.name, html=inner_html(element), data=data)]


# ============================================================================
# Links and images
# ============================================================================

def handle_link(element: Tag, key: str, context: WalkContext) -> List[RenderNode]:
    attrs = {
        "href": get_attr(element, "href") or DEFAULT_LINK_HREF,
        "target": "_blank",
        "rel": "noopener noreferrer",
    }
    title = get_attr(element, "title")
    if title:
        attrs["title"] = title
    return [RenderNode(NodeKind.LINK, key, tag="a", html=inner_html(element), attrs=attrs)]


def handle_image(element: Tag, key: str, context: WalkContext) -> List[RenderNode]:
    """An image; a title attribute turns it into a captioned figure."""
    attrs = {
        "src": get_attr(element, "src") or "",
        "alt": get_attr(element, "alt") or DEFAULT_IMAGE_ALT,
        "loading": "lazy",
    }
    title = get_attr(element, "title") or ""
    if title:
        return [RenderNode(NodeKind.FIGURE, key, tag="figure", text=title, attrs=attrs)]
    return [RenderNode(NodeKind.IMAGE, key, tag="img", attrs=attrs)]


# ============================================================================
# Code
# ============================================================================

def _code_language(pre: Tag, code: Optional[Tag], default: str) -> str:
    for attr in ("data-lang", "data-language"):
        value = get_attr(pre, attr)
        if value:
            return value.strip()
    if code is not None:
        for class_name in class_list(code):
            if class_name.startswith(_LANGUAGE_CLASS_PREFIX):
                language = class_name[len(_LANGUAGE_CLASS_PREFIX):]
                if language:
                    return language
    return default


def handle_pre(element: Tag, key: str, context: WalkContext) -> List[RenderNode]:
    """Fenced code; mermaid and math languages become diagram/math nodes."""
    code = element.find("code")
    source = (code if code is not None else element).get_text().strip()
    language = _code_language(element, code, context.default_code_language)

    if language.lower() in DIAGRAM_LANGUAGES:
        return [RenderNode(NodeKind.DIAGRAM, key, text=source,
                           data={"source": source, "language": language.lower()})]
    if language.lower() in MATH_LANGUAGES:
        return [RenderNode(NodeKind.MATH, key, text=source,
                           data={"formula": source, "display": True})]

    return [RenderNode(NodeKind.CODE_BLOCK, key, tag="pre", text=source,
                       data={"language": language})]


def handle_code(element: Tag, key: str, context: WalkContext) -> List[RenderNode]:
    """Inline code; code inside <pre> belongs to the code block."""
    if element.parent is not None and element.parent.name == "pre":
        return []
    return [RenderNode(NodeKind.INLINE_CODE, key, tag="code", text=element.get_text())]


# ============================================================================
# Tables
# ============================================================================

def handle_table(element: Tag, key: str, context: WalkContext) -> List[RenderNode]:
    """A table block carrying its markup and plain ParsedTable.

    The markup is kept so the host can build the inline TableControls and,
    on request, the fullscreen TableModal from the same input.
    """
    return [
        RenderNode(
            NodeKind.TABLE,
            key,
            tag="table",
            html=outer_html(element),
            data={"table": parse_table_element(element, rich=False)},
        )
    ]


# ============================================================================
# Directive blocks
# ============================================================================

def handle_alert(element: Tag, key: str, context: WalkContext, kind: str) -> List[RenderNode]:
    children = context.walk(list(element.children), key)
    return [RenderNode(NodeKind.ALERT, key, tag=element.name, children=children,
                       data={"kind": kind})]


def handle_math(element: Tag, key: str, context: WalkContext, formula: str) -> List[RenderNode]:
    display = element.name == "div"
    return [RenderNode(NodeKind.MATH, key, tag=element.name, text=formula,
                       data={"formula": formula, "display": display})]


def handle_diagram(element: Tag, key: str, context: WalkContext, source: str) -> List[RenderNode]:
    return [RenderNode(NodeKind.DIAGRAM, key, tag=element.name, text=source,
                       data={"source": source, "language": "mermaid"})]


def handle_ui_component(key: str, component_id: str) -> List[RenderNode]:
    return [RenderNode(NodeKind.UI_COMPONENT, key, data={"component_id": component_id})]


def handle_marker(element: Tag, key: str, context: WalkContext) -> Optional[List[RenderNode]]:
    """Redirect reserved marker elements to their block handlers.

    Returns:
        Nodes for a recognized marker, None to fall through to the tag table
    """
    kind = alert_kind(element)
    if kind is not None:
        if kind in ALERT_KINDS:
            return handle_alert(element, key, context, kind)
        logger.warning("Unknown alert kind %r at %s, rendering as container", kind, key)
        return None

    formula = math_source(element)
    if formula is not None:
        return handle_math(element, key, context, formula)

    source = diagram_source(element)
    if source is not None:
        return handle_diagram(element, key, context, source)

    return None


# ============================================================================
# Dispatch table
# ============================================================================

TAG_HANDLERS: Dict[str, Handler] = {
    **{tag: handle_heading for tag in HEADING_TAGS},
    **{tag: handle_inline for tag in INLINE_TAGS},
    "ul": handle_list,
    "ol": handle_list,
    "a": handle_link,
    "img": handle_image,
    "blockquote": handle_blockquote,
    "table": handle_table,
    "hr": handle_hr,
    "br": handle_br,
    "pre": handle_pre,
    "code": handle_code,
}


__all__ = [
    "DEFAULT_CODE_LANGUAGE",
    "HEADING_TAGS",
    "INLINE_TAGS",
    "WalkContext",
    "Handler",
    "handle_text",
    "handle_paragraph",
    "handle_heading",
    "handle_blockquote",
    "handle_inline",
    "handle_hr",
    "handle_br",
    "handle_list",
    "handle_link",
    "handle_image",
    "handle_pre",
    "handle_code",
    "handle_table",
    "handle_alert",
    "handle_math",
    "handle_diagram",
    "handle_ui_component",
    "handle_marker",
    "TAG_HANDLERS",
]
