"""
Functions - shared utility module

Utilities used by both the HTML walker and the table engine.

Module layout:
- html_utils: BeautifulSoup parsing, text/markup accessors, tag stripping
- collation: locale-aware sort keys (pyuca)
- debounce: trailing-edge Debouncer for search input
- memoize: MemoCell, identity-keyed single-slot memoization
- events: EventTarget / UIEvent for scoped global listeners

Usage:
    from docrender.core.functions import strip_tags, Debouncer, MemoCell
"""

from docrender.core.functions.html_utils import (
    DEFAULT_PARSER,
    SUPPORTED_PARSERS,
    parse_fragment,
    strip_tags,
    text_content,
    inner_html,
    outer_html,
)
from docrender.core.functions.collation import (
    DEFAULT_COLLATION_LOCALE,
    collation_key,
    get_collator,
)
from docrender.core.functions.debounce import (
    DEFAULT_DEBOUNCE_DELAY,
    Debouncer,
)
from docrender.core.functions.memoize import (
    MemoCell,
    same_input,
)
from docrender.core.functions.events import (
    EventTarget,
    UIEvent,
)

__all__ = [
    # html_utils
    "DEFAULT_PARSER",
    "SUPPORTED_PARSERS",
    "parse_fragment",
    "strip_tags",
    "text_content",
    "inner_html",
    "outer_html",
    # collation
    "DEFAULT_COLLATION_LOCALE",
    "collation_key",
    "get_collator",
    # debounce
    "DEFAULT_DEBOUNCE_DELAY",
    "Debouncer",
    # memoize
    "MemoCell",
    "same_input",
    # events
    "EventTarget",
    "UIEvent",
]
