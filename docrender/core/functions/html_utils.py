# docrender/core/functions/html_utils.py
"""
HTML Utilities - BeautifulSoup helpers shared by the walker and table engine

All markup reaching this package has already been restricted to an
allow-listed tag/attribute subset upstream, so these helpers only parse
and read; they never sanitize.

Usage:
    from docrender.core.functions.html_utils import parse_fragment, strip_tags

    soup = parse_fragment("<p>Hello <strong>world</strong></p>")
    text = strip_tags("<em>Eng</em>")  # "Eng"
"""
import logging
from functools import lru_cache
from typing import List, Optional

from bs4 import BeautifulSoup, Tag
from bs4.element import (
    CData,
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    PageElement,
    ProcessingInstruction,
)

logger = logging.getLogger("document-renderer")

DEFAULT_PARSER = "html.parser"
SUPPORTED_PARSERS = ("html.parser", "lxml", "html5lib")

# NavigableString subclasses that never carry visible text
_NON_TEXT_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


def parse_fragment(html: str, parser: str = DEFAULT_PARSER) -> BeautifulSoup:
    """Parse an HTML fragment into a BeautifulSoup tree.

    Args:
        html: Markup fragment (may be empty)
        parser: BeautifulSoup tree builder name

    Returns:
        BeautifulSoup document whose top-level children mirror the fragment
    """
    return BeautifulSoup(html or "", parser)


def is_text_node(node: PageElement) -> bool:
    """Check whether a node is a literal text node (comments etc. excluded)."""
    if isinstance(node, CData):
        return True
    return isinstance(node, NavigableString) and not isinstance(node, _NON_TEXT_STRINGS)


def is_element(node: PageElement) -> bool:
    return isinstance(node, Tag)


def text_content(node: PageElement) -> str:
    """DOM-style textContent of a node."""
    if isinstance(node, Tag):
        return node.get_text()
    if is_text_node(node):
        return str(node)
    return ""


def inner_html(tag: Tag) -> str:
    return tag.decode_contents()


def outer_html(tag: Tag) -> str:
    return str(tag)


def class_list(tag: Tag) -> List[str]:
    """Return the element's class names as a list."""
    classes = tag.get("class")
    if not classes:
        return []
    if isinstance(classes, str):
        return classes.split()
    return list(classes)


def has_class(tag: Tag, class_name: str) -> bool:
    return class_name in class_list(tag)


def get_attr(tag: Tag, name: str, default: Optional[str] = None) -> Optional[str]:
    """Read a single-valued attribute, joining multi-valued ones with spaces."""
    value = tag.get(name)
    if value is None:
        return default
    if isinstance(value, list):
        return " ".join(value)
    return value


@lru_cache(maxsize=4096)
def strip_tags(html: str) -> str:
    """Reduce markup to its plain text (entities decoded, tags removed).

    Rich table cells are compared through this function, so it is cached
    per distinct markup string.
    """
    if not html:
        return ""
    if "<" not in html and "&" not in html:
        return html
    return BeautifulSoup(html, DEFAULT_PARSER).get_text()


__all__ = [
    "DEFAULT_PARSER",
    "SUPPORTED_PARSERS",
    "parse_fragment",
    "is_text_node",
    "is_element",
    "text_content",
    "inner_html",
    "outer_html",
    "class_list",
    "has_class",
    "get_attr",
    "strip_tags",
]
