# docrender/core/processor/table_helper/table_parser.py
"""
Table Parser - Table markup to ParsedTable

Turns an already-sanitized <table> subtree into a ParsedTable.

Parsing rules:
- Headers: <thead> <th> cells in document order; text is trimmed,
  alignment comes from the align attribute, else an inline
  text-align style, else Alignment.NONE
- Rows: <tbody> <tr> rows; each <td> maps to the header at the same
  position. Cells beyond the last header are kept positionally but get
  no record entry. With duplicate header texts the later cell
  overwrites the earlier one in the row record.
- A table without <thead> or <tbody> yields the empty ParsedTable

Modes:
- plain (rich=False): cells hold trimmed text, used by the inline table
- rich (rich=True): cells hold trimmed inner markup, used by the
  fullscreen table; plain text is derived by stripping tags

Usage:
    from docrender.core.processor.table_helper.table_parser import parse_table

    table = parse_table(table_html)
    table.headers[0].text, table.rows[0].record
"""
import logging
from typing import Dict, List, Optional

from bs4 import Tag

from docrender.core.functions.html_utils import (
    DEFAULT_PARSER,
    get_attr,
    inner_html,
    parse_fragment,
)
from docrender.core.processor.table_helper.table_constants import (
    ALIGN_ATTRIBUTE,
    EXPLICIT_ALIGNMENTS,
    TEXT_ALIGN_STYLE_PATTERN,
    Alignment,
)
from docrender.core.processor.table_helper.table_types import (
    EMPTY_TABLE,
    ParsedTable,
    TableHeader,
    TableRow,
)

logger = logging.getLogger("document-renderer")


def detect_alignment(cell: Tag) -> Alignment:
    """Detect a cell's alignment.

    Args:
        cell: <th> or <td> element

    Returns:
        Alignment from the align attribute, else from an inline
        text-align declaration, else Alignment.NONE
    """
    align = (get_attr(cell, ALIGN_ATTRIBUTE) or "").strip().lower()
    if align in EXPLICIT_ALIGNMENTS:
        return EXPLICIT_ALIGNMENTS[align]

    style = get_attr(cell, "style")
    if style:
        match = TEXT_ALIGN_STYLE_PATTERN.search(style)
        if match:
            return EXPLICIT_ALIGNMENTS[match.group(1).lower()]

    return Alignment.NONE


def _cell_value(cell: Tag, rich: bool) -> str:
    if rich:
        return inner_html(cell).strip()
    return cell.get_text().strip()


def _extract_headers(thead: Tag) -> List[TableHeader]:
    head_cells = thead.find_all("th")
    return [
        TableHeader(
            text=th.get_text().strip(),
            col_index=col_index,
            alignment=detect_alignment(th),
        )
        for col_index, th in enumerate(head_cells)
    ]


def _extract_row(tr: Tag, headers: List[TableHeader], rich: bool) -> TableRow:
    cells = tr.find_all("td", recursive=False)
    values = []
    alignments = []
    record: Dict[str, str] = {}

    for index, td in enumerate(cells):
        value = _cell_value(td, rich)
        values.append(value)
        alignments.append(detect_alignment(td))
        if index < len(headers):
            # Duplicate header texts: last write wins
            record[headers[index].text] = value

    return TableRow(
        cells=tuple(values),
        record=record,
        alignments=tuple(alignments),
        rich=rich,
    )


def parse_table_element(table: Optional[Tag], rich: bool = False) -> ParsedTable:
    """Parse a <table> element.

    Args:
        table: The table element (None yields the empty table)
        rich: Preserve each cell's inner markup

    Returns:
        ParsedTable, empty when <thead> or <tbody> is missing
    """
    if table is None:
        return EMPTY_TABLE

    thead = table.find("thead", recursive=False)
    tbodies = table.find_all("tbody", recursive=False)
    if thead is None or not tbodies:
        logger.debug("Table without thead/tbody, returning empty ParsedTable")
        return EMPTY_TABLE

    headers = _extract_headers(thead)
    rows = [
        _extract_row(tr, headers, rich)
        for tbody in tbodies
        for tr in tbody.find_all("tr", recursive=False)
    ]

    return ParsedTable(headers=tuple(headers), rows=tuple(rows), rich=rich)


def parse_table(table_html: str, rich: bool = False, parser: str = DEFAULT_PARSER) -> ParsedTable:
    """Parse table markup into a ParsedTable.

    The first <table> in the fragment is used. Parsing identical markup
    twice yields equal ParsedTable values.

    Args:
        table_html: Markup containing a <table>
        rich: Preserve each cell's inner markup
        parser: BeautifulSoup tree builder name

    Returns:
        ParsedTable (empty for missing/malformed table structure)
    """
    if not table_html or "<table" not in table_html.lower():
        return EMPTY_TABLE

    soup = parse_fragment(table_html, parser)
    return parse_table_element(soup.find("table"), rich=rich)


__all__ = [
    "detect_alignment",
    "parse_table_element",
    "parse_table",
]
