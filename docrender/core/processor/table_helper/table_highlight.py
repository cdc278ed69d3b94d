# docrender/core/processor/table_helper/table_highlight.py
"""
Table Highlight - Render-only search match emphasis

Wraps case-insensitive matches of the search query in <mark> elements.
Works on a fresh parse of the displayed value on every call, so the
stored cell value is never modified. Text already inside a <mark> is
skipped, which prevents double-wrapping.

Usage:
    html = highlight_html("<strong>Engineer</strong>", "eng")
    # '<strong><mark>Eng</mark>ineer</strong>'
"""
import html as html_module
import re
from dataclasses import dataclass
from typing import List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag

from docrender.core.functions.html_utils import (
    DEFAULT_PARSER,
    is_element,
    is_text_node,
    parse_fragment,
)
from docrender.core.processor.table_helper.table_constants import HIGHLIGHT_TAG


@dataclass(frozen=True)
class TextPart:
    text: str
    is_match: bool


def split_text_by_query(text: str, query: str) -> List[TextPart]:
    """Split text into matching and non-matching runs.

    Matches are case-insensitive, non-overlapping and found left to right.
    Empty runs are omitted.
    """
    if not text:
        return []
    if not query:
        return [TextPart(text, False)]

    parts: List[TextPart] = []
    current = 0
    for match in re.finditer(re.escape(query), text, re.IGNORECASE):
        if match.start() > current:
            parts.append(TextPart(text[current:match.start()], False))
        parts.append(TextPart(match.group(), True))
        current = match.end()

    if current < len(text):
        parts.append(TextPart(text[current:], False))
    return parts


def _collect_text_nodes(node: Tag, into: List[NavigableString]) -> None:
    for child in node.children:
        if is_element(child):
            if child.name != HIGHLIGHT_TAG:
                _collect_text_nodes(child, into)
        elif is_text_node(child):
            into.append(child)


def _highlight_text_node(
    soup: BeautifulSoup,
    node: NavigableString,
    query: str,
    css_class: Optional[str],
) -> None:
    parts = split_text_by_query(str(node), query)
    if not any(part.is_match for part in parts):
        return

    replacements = []
    for part in parts:
        if part.is_match:
            mark = soup.new_tag(HIGHLIGHT_TAG)
            if css_class:
                mark["class"] = css_class
            mark.string = part.text
            replacements.append(mark)
        else:
            replacements.append(NavigableString(part.text))
    node.replace_with(*replacements)


def highlight_html(
    html: str,
    query: str,
    css_class: Optional[str] = None,
    parser: str = DEFAULT_PARSER,
) -> str:
    """Return html with every query match in its text wrapped in <mark>.

    Args:
        html: Displayed cell markup
        query: Search text; "" returns html unchanged
        css_class: Optional class for the generated <mark> elements
        parser: BeautifulSoup tree builder name

    Returns:
        Highlighted markup
    """
    if not html or not query:
        return html

    soup = parse_fragment(html, parser)
    text_nodes: List[NavigableString] = []
    _collect_text_nodes(soup, text_nodes)
    for node in text_nodes:
        _highlight_text_node(soup, node, query, css_class)
    return soup.decode()


def highlight_text(text: str, query: str, css_class: Optional[str] = None) -> str:
    """Escape plain text and highlight query matches in it."""
    escaped = html_module.escape(text, quote=False)
    if not query:
        return escaped
    return highlight_html(escaped, query, css_class=css_class)


__all__ = [
    "TextPart",
    "split_text_by_query",
    "highlight_html",
    "highlight_text",
]
