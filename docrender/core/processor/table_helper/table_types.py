# docrender/core/processor/table_helper/table_types.py
"""
Table Data Model

Immutable value types produced by the table parser and consumed by the
filter/sort/search engine.

Column identity:
- int: column position (used by both table views)
- str: header text (reads the row record; last duplicate wins)

Every engine function accepts either form through TableRow.value() and
TableRow.plain().

Rich vs. plain:
- plain rows hold tag-stripped, trimmed cell text
- rich rows hold each cell's inner markup; plain text is derived on
  demand by stripping tags
"""
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple, Union

from docrender.core.functions.html_utils import strip_tags
from docrender.core.processor.table_helper.table_constants import Alignment, SortDirection

ColumnKey = Union[int, str]

# Column identity -> non-empty set of allowed plain-text values
FilterState = Mapping[ColumnKey, FrozenSet[str]]

VisibleColumns = FrozenSet[ColumnKey]


# ============================================================================
# Parsed table
# ============================================================================

@dataclass(frozen=True)
class TableHeader:
    """A head cell.

    Attributes:
        text: Trimmed header text
        col_index: Position among the head cells
        alignment: Alignment from the align attribute or inline style
    """
    text: str
    col_index: int
    alignment: Alignment = Alignment.NONE


@dataclass(frozen=True)
class TableRow:
    """A body row.

    Attributes:
        cells: Cell values in document order (rich markup or plain text)
        record: Header text -> cell value; with duplicate header texts the
            later cell wins
        alignments: Per-cell alignment from the cell's own markup
        rich: Whether cells hold markup
    """
    cells: Tuple[str, ...] = ()
    record: Dict[str, str] = field(default_factory=dict, hash=False)
    alignments: Tuple[Alignment, ...] = ()
    rich: bool = False

    def value(self, column: ColumnKey) -> str:
        """Stored value for a column (markup in rich mode), "" if absent."""
        if isinstance(column, int):
            if 0 <= column < len(self.cells):
                return self.cells[column]
            return ""
        return self.record.get(column, "")

    def plain(self, column: ColumnKey) -> str:
        """Plain text used for filtering, searching and sorting."""
        value = self.value(column)
        if self.rich:
            return strip_tags(value).strip()
        return value

    def alignment(self, column: int) -> Alignment:
        if 0 <= column < len(self.alignments):
            return self.alignments[column]
        return Alignment.NONE


@dataclass(frozen=True)
class ParsedTable:
    """Structured {headers, rows} extracted from table markup.

    The empty ParsedTable (no headers, no rows) stands for malformed
    input and is accepted by every engine function.
    """
    headers: Tuple[TableHeader, ...] = ()
    rows: Tuple[TableRow, ...] = ()
    rich: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.headers and not self.rows

    @property
    def header_texts(self) -> Tuple[str, ...]:
        return tuple(header.text for header in self.headers)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "headers": [
                {"text": h.text, "col_index": h.col_index, "alignment": h.alignment.value}
                for h in self.headers
            ],
            "rows": [dict(row.record) for row in self.rows],
        }


# ============================================================================
# Session state
# ============================================================================

@dataclass(frozen=True)
class SortState:
    """Active sort column and direction; only one column sorts at a time."""
    column: Optional[ColumnKey] = None
    direction: SortDirection = SortDirection.NONE

    @property
    def is_active(self) -> bool:
        return self.column is not None and self.direction is not SortDirection.NONE

    def direction_for(self, column: ColumnKey) -> SortDirection:
        """Direction to show on a header's sort indicator."""
        if self.column == column:
            return self.direction
        return SortDirection.NONE


@dataclass(frozen=True)
class DisplayCell:
    """A rendered cell of the current view.

    Attributes:
        column: Column identity
        html: Cell markup with search matches highlighted
        alignment: Alignment to render with
    """
    column: ColumnKey
    html: str
    alignment: Alignment = Alignment.NONE


EMPTY_TABLE = ParsedTable()


__all__ = [
    "ColumnKey",
    "FilterState",
    "VisibleColumns",
    "TableHeader",
    "TableRow",
    "ParsedTable",
    "SortState",
    "DisplayCell",
    "EMPTY_TABLE",
]
