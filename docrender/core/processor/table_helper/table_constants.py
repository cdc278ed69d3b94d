# docrender/core/processor/table_helper/table_constants.py
"""
Table Constants

Enumerations and defaults shared by the table parser, the
filter/sort/search engine and the inline/fullscreen controllers.
"""
import re
from enum import Enum


# ==========================================================================
# Enumerations
# ==========================================================================

class Alignment(str, Enum):
    """Column alignment detected from header cell markup."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    NONE = "none"        # no explicit alignment, host renders left


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"
    NONE = "none"        # original parse order


# Header click cycle for the active column
SORT_CYCLE = (SortDirection.ASC, SortDirection.DESC, SortDirection.NONE)


# ==========================================================================
# Parsing
# ==========================================================================

ALIGN_ATTRIBUTE = "align"
EXPLICIT_ALIGNMENTS = {
    "left": Alignment.LEFT,
    "center": Alignment.CENTER,
    "right": Alignment.RIGHT,
}
TEXT_ALIGN_STYLE_PATTERN = re.compile(r"text-align\s*:\s*(left|center|right)\b", re.IGNORECASE)


# ==========================================================================
# Controller defaults
# ==========================================================================

DEFAULT_SEARCH_DEBOUNCE_SECONDS = 0.3
EMPTY_CELL_PLACEHOLDER = "-"
HIGHLIGHT_TAG = "mark"


__all__ = [
    "Alignment",
    "SortDirection",
    "SORT_CYCLE",
    "ALIGN_ATTRIBUTE",
    "EXPLICIT_ALIGNMENTS",
    "TEXT_ALIGN_STYLE_PATTERN",
    "DEFAULT_SEARCH_DEBOUNCE_SECONDS",
    "EMPTY_CELL_PLACEHOLDER",
    "HIGHLIGHT_TAG",
]
