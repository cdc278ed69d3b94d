# docrender/core/processor/directives.py
"""
Directives - Embedded directive patterns and reserved markers

Two kinds of directives reach the walker:

Textual directives (paragraph text):
- [uic:<identifier>]        UI-component embed, anywhere in the paragraph
- :::accordion <title>      opens an accordion; the next paragraph starting
                            with ":::accordion" ends it

Marker elements (class + companion data attribute, produced upstream):
- <div class="custom-alert" data-alert-type="note|tip|important|warning|caution">
- <div|span class="custom-math" data-formula="...">    (div = display mode)
- <div class="custom-diagram" data-diagram="...">

Fenced code in the diagram/math languages is redirected the same way.
"""
import re
from typing import Optional

from bs4 import Tag

from docrender.core.functions.html_utils import get_attr, has_class

# ==========================================================================
# Textual directives
# ==========================================================================

UI_COMPONENT_PATTERN = re.compile(r"\[uic:([a-z-]+)\]")
ACCORDION_PREFIX = ":::accordion"
ACCORDION_PATTERN = re.compile(r"^:::accordion\s+(.+)", re.DOTALL)

# ==========================================================================
# Marker elements
# ==========================================================================

ALERT_CLASS = "custom-alert"
ALERT_KIND_ATTR = "data-alert-type"
ALERT_KINDS = ("note", "tip", "important", "warning", "caution")

MATH_CLASS = "custom-math"
MATH_SOURCE_ATTR = "data-formula"

DIAGRAM_CLASS = "custom-diagram"
DIAGRAM_SOURCE_ATTR = "data-diagram"

DIAGRAM_LANGUAGES = ("mermaid",)
MATH_LANGUAGES = ("math", "latex", "katex")


def match_ui_component(text: str) -> Optional[str]:
    """Return the component identifier of a [uic:...] directive in text."""
    match = UI_COMPONENT_PATTERN.search(text or "")
    return match.group(1) if match else None


def is_accordion_marker(text: str) -> bool:
    return (text or "").strip().startswith(ACCORDION_PREFIX)


def match_accordion_title(text: str) -> Optional[str]:
    """Return the title of an accordion opener, None for a bare marker."""
    match = ACCORDION_PATTERN.match((text or "").strip())
    if not match:
        return None
    title = match.group(1).strip()
    return title or None


def alert_kind(element: Tag) -> Optional[str]:
    """Alert kind of an alert marker element, None if not a marker."""
    if not has_class(element, ALERT_CLASS):
        return None
    kind = get_attr(element, ALERT_KIND_ATTR)
    return kind.strip().lower() if kind else None


def math_source(element: Tag) -> Optional[str]:
    if not has_class(element, MATH_CLASS):
        return None
    return get_attr(element, MATH_SOURCE_ATTR)


def diagram_source(element: Tag) -> Optional[str]:
    if not has_class(element, DIAGRAM_CLASS):
        return None
    return get_attr(element, DIAGRAM_SOURCE_ATTR)


__all__ = [
    "UI_COMPONENT_PATTERN",
    "ACCORDION_PREFIX",
    "ACCORDION_PATTERN",
    "ALERT_CLASS",
    "ALERT_KIND_ATTR",
    "ALERT_KINDS",
    "MATH_CLASS",
    "MATH_SOURCE_ATTR",
    "DIAGRAM_CLASS",
    "DIAGRAM_SOURCE_ATTR",
    "DIAGRAM_LANGUAGES",
    "MATH_LANGUAGES",
    "match_ui_component",
    "is_accordion_marker",
    "match_accordion_title",
    "alert_kind",
    "math_source",
    "diagram_source",
]
