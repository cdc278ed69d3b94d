# docrender/core/functions/collation.py
"""
Collation - Locale-aware sort keys for table values

Keys come from pyuca, an implementation of the Unicode Collation
Algorithm over the CLDR root collation table. Accents and case are
secondary and tertiary differences, so "apple" < "Apple" < "banana" <
"éclair".

A locale may move its native script ahead of the other scripts, the way
CLDR tailors Russian ([reorder Cyrl]). The resulting order is:
1. common characters (spaces, punctuation, symbols, digits)
2. the locale's script
3. Latin and every other script

Usage:
    from docrender.core.functions.collation import collation_key

    sorted(values, key=lambda v: collation_key(v, "ru"))
"""
import logging
import re
import unicodedata
from functools import lru_cache
from typing import Dict, FrozenSet, Optional, Sequence, Tuple

from pyuca import Collator

logger = logging.getLogger("document-renderer")

DEFAULT_COLLATION_LOCALE = "ru"
ROOT_LOCALE = "root"

# Code point blocks per script
SCRIPT_RANGES: Dict[str, Tuple[Tuple[int, int], ...]] = {
    "Cyrl": ((0x0400, 0x052F), (0x1C80, 0x1C8F), (0x2DE0, 0x2DFF), (0xA640, 0xA69F)),
    "Grek": ((0x0370, 0x03FF), (0x1F00, 0x1FFF)),
}

# Language -> script sorted ahead of the others
LOCALE_SCRIPT_REORDER: Dict[str, str] = {
    "ru": "Cyrl",
    "uk": "Cyrl",
    "be": "Cyrl",
    "bg": "Cyrl",
    "mk": "Cyrl",
    "sr": "Cyrl",
    "kk": "Cyrl",
    "ky": "Cyrl",
    "mn": "Cyrl",
    "tg": "Cyrl",
    "el": "Grek",
}

_LOCALE_SEPARATOR = re.compile(r"[-_.@]")

# Common characters, the reordered script, everything else
_GROUP_COMMON = 0
_GROUP_REORDERED = 1
_GROUP_OTHER = 2

CollationKey = Tuple[Tuple[Tuple[int, int], ...], Tuple[int, ...]]


@lru_cache(maxsize=1)
def _root_collator() -> Collator:
    return Collator()


def _primary_weights(sort_key: Sequence[int]) -> Tuple[int, ...]:
    # Level separators are 0; primary weights never are
    sort_key = tuple(sort_key)
    end = sort_key.index(0) if 0 in sort_key else len(sort_key)
    return sort_key[:end]


def normalize_locale(locale: Optional[str]) -> str:
    """Reduce a locale tag ("ru_RU.UTF-8", "ru-RU") to its language code."""
    if not locale or not locale.strip():
        return ROOT_LOCALE
    return _LOCALE_SEPARATOR.split(locale.strip(), 1)[0].lower() or ROOT_LOCALE


class LocaleCollator:
    """UCA collator for one locale, with optional script reordering.

    Attributes:
        locale: Normalized language code
        script: Script sorted ahead of the others (None keeps root order)
    """

    def __init__(self, locale: str = DEFAULT_COLLATION_LOCALE):
        self.locale = normalize_locale(locale)
        self.script = LOCALE_SCRIPT_REORDER.get(self.locale)
        self._collator = _root_collator()
        self._first_letter = _primary_weights(self._collator.sort_key("a"))[0]
        self._reordered: FrozenSet[int] = frozenset()

        if self.script is not None:
            self._reordered = self._script_weights(self.script)
        elif self.locale != ROOT_LOCALE:
            logger.debug("No script reordering for locale %r, using root order", self.locale)

    def _script_weights(self, script: str) -> FrozenSet[int]:
        """Primary weights of the letters of a script."""
        weights = set()
        for start, end in SCRIPT_RANGES[script]:
            for code_point in range(start, end + 1):
                char = chr(code_point)
                if not unicodedata.category(char).startswith("L"):
                    continue
                weights.update(
                    weight for weight in _primary_weights(self._collator.sort_key(char))
                    if weight >= self._first_letter
                )
        return frozenset(weights)

    def _group(self, weight: int) -> int:
        if weight in self._reordered:
            return _GROUP_REORDERED
        if weight < self._first_letter:
            return _GROUP_COMMON
        return _GROUP_OTHER

    def sort_key(self, text: str) -> CollationKey:
        key = tuple(self._collator.sort_key(text))
        primaries = _primary_weights(key)
        return (
            tuple((self._group(weight), weight) for weight in primaries),
            key[len(primaries):],
        )


@lru_cache(maxsize=16)
def get_collator(locale: str = DEFAULT_COLLATION_LOCALE) -> LocaleCollator:
    return LocaleCollator(locale)


def collation_key(text: str, locale: str = DEFAULT_COLLATION_LOCALE) -> CollationKey:
    """Sort key ordering text the way the locale's readers expect."""
    return get_collator(normalize_locale(locale)).sort_key(text)


__all__ = [
    "DEFAULT_COLLATION_LOCALE",
    "ROOT_LOCALE",
    "CollationKey",
    "LocaleCollator",
    "normalize_locale",
    "get_collator",
    "collation_key",
]
