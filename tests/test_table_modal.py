import pytest

from docrender.core.functions import EventTarget, UIEvent
from docrender.core.processor.table_helper import (
    EMPTY_TABLE,
    SortDirection,
    TableControls,
    TableModal,
    TableModalConfig,
)
from docrender.core.processor.table_helper.table_modal import KEYDOWN_EVENT, POINTERDOWN_EVENT


@pytest.fixture
def events():
    return EventTarget()


@pytest.fixture
def closed():
    return []


@pytest.fixture
def modal(events, closed, clock):
    return TableModal(events, on_close=lambda: closed.append(True), clock=clock)


def names(view):
    return [row.plain(0) for row in view.rows]


def test_open_attaches_listeners_and_close_detaches(modal, events, closed, rich_table_html):
    modal.open(rich_table_html)

    assert modal.is_open
    assert events.listener_count(KEYDOWN_EVENT) == 1
    assert events.listener_count(POINTERDOWN_EVENT) == 1

    modal.close()
    modal.close()

    assert not modal.is_open
    assert events.listener_count() == 0
    assert closed == [True]
    assert modal.table == EMPTY_TABLE


def test_escape_closes(modal, events, closed, rich_table_html):
    modal.open(rich_table_html)
    events.dispatch(UIEvent(KEYDOWN_EVENT, key="Enter"))
    assert modal.is_open

    events.dispatch(UIEvent(KEYDOWN_EVENT, key="Escape"))

    assert not modal.is_open
    assert closed == [True]
    assert events.listener_count() == 0


def test_backdrop_click_closes(modal, events, rich_table_html):
    modal.open(rich_table_html)
    events.dispatch(UIEvent(POINTERDOWN_EVENT, target="table"))
    assert modal.is_open

    events.dispatch(UIEvent(POINTERDOWN_EVENT, target="backdrop"))
    assert not modal.is_open


def test_escape_ignored_when_disabled(events, rich_table_html):
    modal = TableModal(events, TableModalConfig(close_on_escape=False))
    modal.open(rich_table_html)

    events.dispatch(UIEvent(KEYDOWN_EVENT, key="Escape"))
    assert modal.is_open


def test_context_manager_scopes_listeners(modal, events, closed, rich_table_html):
    with modal.opened(rich_table_html) as opened:
        assert opened is modal
        assert events.listener_count() == 2

    assert events.listener_count() == 0
    assert closed == [True]


def test_columns_keyed_by_position(modal, rich_table_html):
    modal.open(rich_table_html)

    assert modal.column_keys == (0, 1, 2)
    assert modal.visible_columns == frozenset({0, 1, 2})

    modal.set_filter(1, "Eng", True)
    assert names(modal) == ["Ann", "Cy"]
    assert modal.unique_values(1) == ["Eng", "PM"]


def test_rich_cells_keep_formatting_and_highlight(modal, rich_table_html):
    modal.open(rich_table_html)
    modal.set_search_query("ann")

    row = modal.display_rows()[0]
    assert row[0].html == "<strong><mark>Ann</mark></strong>"
    assert modal.table.rows[0].value("Name") == "<strong>Ann</strong>"


def test_empty_cells_show_placeholder(modal):
    html = (
        "<table><thead><tr><th>A</th><th>B</th></tr></thead>"
        "<tbody><tr><td>x</td><td></td></tr></tbody></table>"
    )
    modal.open(html)

    assert [cell.html for cell in modal.display_rows()[0]] == ["x", "-"]


def test_reopen_starts_fresh(modal, rich_table_html):
    modal.open(rich_table_html)
    modal.set_filter(1, "Eng", True)
    modal.toggle_column(2)
    modal.close()

    modal.open(rich_table_html)
    assert modal.filters == {}
    assert modal.visible_columns == frozenset({0, 1, 2})


def test_open_with_same_markup_keeps_state(modal, events, rich_table_html):
    modal.open(rich_table_html)
    modal.sort_by(0)
    modal.open(rich_table_html)

    assert modal.sort_state.direction is SortDirection.ASC
    assert events.listener_count() == 2


def test_reset_filters_keeps_sort(modal, clock, rich_table_html):
    modal.open(rich_table_html)
    modal.sort_by(0)
    modal.set_filter(2, "Core", True)
    modal.type_search("b")

    modal.reset_filters()
    clock.advance(1)
    modal.tick()

    assert modal.filters == {}
    assert modal.search_query == ""
    assert modal.sort_state.column == 0
    assert len(modal.rows) == 3


def test_state_is_independent_of_inline_view(modal, rich_table_html):
    inline = TableControls(rich_table_html)
    modal.open(rich_table_html)

    inline.toggle_filter(1, "Eng")
    assert len(modal.rows) == 3
    assert modal.filters == {}


@pytest.mark.parametrize(
    "query, column_filter",
    [
        ("core", None),
        ("", (1, "PM")),
        ("e", (2, "Edge")),
    ],
)
def test_inline_and_fullscreen_agree(modal, rich_table_html, query, column_filter):
    """Same content, filter and query yield the same rows in both views."""
    inline = TableControls(rich_table_html)
    modal.open(rich_table_html)

    if column_filter:
        inline.toggle_filter(*column_filter)
        modal.toggle_filter(*column_filter)
    inline.set_search_query(query)
    modal.set_search_query(query)

    assert names(inline) == names(modal)


DUPLICATE_HEADERS = (
    "<table><thead><tr><th>Name</th><th>Name</th></tr></thead>"
    "<tbody><tr><td>Ann</td><td>x</td></tr><tr><td>Bo</td><td>y</td></tr></tbody></table>"
)


def test_duplicate_headers_keep_every_column(modal):
    modal.open(DUPLICATE_HEADERS)

    assert modal.column_keys == (0, 1)
    assert [[cell.html for cell in row] for row in modal.display_rows()] == [["Ann", "x"], ["Bo", "y"]]
    assert modal.unique_values(1) == ["x", "y"]


def test_duplicate_headers_search_agrees_with_inline_view(modal):
    inline = TableControls(DUPLICATE_HEADERS)
    modal.open(DUPLICATE_HEADERS)

    inline.set_search_query("ann")
    modal.set_search_query("ann")

    assert names(inline) == names(modal) == ["Ann"]
    assert [cell.html for cell in modal.display_rows()[0]] == ["<mark>Ann</mark>", "x"]
