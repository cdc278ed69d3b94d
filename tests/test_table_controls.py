import pytest

from docrender.core.processor.table_helper import (
    Alignment,
    SortDirection,
    SortState,
    TableControls,
    TableControlsConfig,
)


def names(controls):
    return [row.plain(0) for row in controls.rows]


@pytest.fixture
def controls(team_table_html, clock):
    return TableControls(team_table_html, clock=clock)


def test_initial_state_shows_everything(controls):
    assert controls.has_data
    assert controls.visible_columns == frozenset({0, 1})
    assert controls.sort_state == SortState()
    assert controls.filters == {}
    assert names(controls) == ["Ann", "Bo", "Cy"]


def test_filter_sort_and_unique_values(controls):
    """Filter options are computed from all rows, not the filtered ones."""
    controls.toggle_filter(1, "Eng")
    assert names(controls) == ["Ann", "Cy"]
    assert controls.unique_values(1) == ["Eng", "PM"]
    assert controls.unique_values(0) == ["Ann", "Bo", "Cy"]
    assert controls.active_filter_count == 1

    controls.sort_by(0)
    controls.sort_by(0)
    assert controls.sort_state.direction is SortDirection.DESC
    assert names(controls) == ["Cy", "Ann"]

    controls.toggle_filter(1, "Eng")
    assert controls.filters == {}
    assert names(controls) == ["Cy", "Bo", "Ann"]


def test_sort_cycle_returns_to_original_order(controls):
    controls.sort_by(0)
    assert controls.sort_indicator(0) is SortDirection.ASC
    assert controls.sort_indicator(1) is SortDirection.NONE
    assert names(controls) == ["Ann", "Bo", "Cy"]
    controls.sort_by(0)
    assert names(controls) == ["Cy", "Bo", "Ann"]
    controls.sort_by(0)
    assert names(controls) == ["Ann", "Bo", "Cy"]
    assert controls.sort_state.direction is SortDirection.NONE


def test_search_is_debounced(controls, clock):
    controls.type_search("e")
    clock.advance(0.1)
    controls.type_search("en")
    clock.advance(0.1)
    controls.type_search("eng")

    assert controls.search_input == "eng"
    assert controls.search_query == ""
    assert controls.tick() is False
    assert len(controls.rows) == 3

    clock.advance(0.3)
    assert controls.tick() is True
    assert controls.search_query == "eng"
    assert names(controls) == ["Ann", "Cy"]


def test_search_ignores_hidden_columns(controls):
    controls.toggle_column(1)
    controls.set_search_query("PM")

    assert controls.rows == []

    controls.toggle_column(1)
    assert names(controls) == ["Bo"]


def test_hiding_last_visible_column_is_rejected(controls, caplog):
    assert controls.toggle_column(0) is True
    with caplog.at_level("WARNING", logger="document-renderer"):
        assert controls.toggle_column(1) is False

    assert controls.visible_columns == frozenset({1})
    assert "last visible column" in caplog.text


def test_hiding_all_columns_when_allowed(team_table_html):
    controls = TableControls(team_table_html, TableControlsConfig(allow_hide_all_columns=True))
    controls.toggle_column(0)

    assert controls.toggle_column(1) is True
    assert controls.visible_headers == []

    controls.show_all_columns()
    assert controls.visible_columns == frozenset({0, 1})


def test_rows_are_memoized_until_state_changes(controls):
    first = controls.rows
    assert controls.rows is first

    controls.sort_by(1)
    assert controls.rows is not first


def test_reset_keeps_column_visibility(controls, clock):
    controls.toggle_filter(1, "Eng")
    controls.sort_by(0)
    controls.toggle_column(1)
    controls.type_search("an")

    controls.reset()
    clock.advance(1)
    controls.tick()

    assert controls.filters == {}
    assert controls.sort_state == SortState()
    assert controls.search_query == ""
    assert controls.search_input == ""
    assert controls.visible_columns == frozenset({0})


def test_changed_markup_resets_session(controls):
    controls.toggle_filter(1, "Eng")
    controls.toggle_column(1)
    controls.toggle_filters_panel()

    assert controls.set_table_html(controls.table_html) is False
    assert controls.active_filter_count == 1

    html = (
        "<table><thead><tr><th>City</th><th>Zip</th><th>State</th></tr></thead>"
        "<tbody><tr><td>Oslo</td><td>0150</td><td>-</td></tr></tbody></table>"
    )
    assert controls.set_table_html(html) is True
    assert controls.filters == {}
    assert controls.visible_columns == frozenset({0, 1, 2})
    assert controls.show_filters is False
    assert names(controls) == ["Oslo"]


def test_display_rows_highlight_visible_cells(controls):
    controls.set_search_query("an")
    rows = controls.display_rows()

    assert len(rows) == 1
    assert [cell.column for cell in rows[0]] == [0, 1]
    assert rows[0][0].html == "<mark>An</mark>n"
    assert rows[0][1].html == "Eng"


def test_display_rows_use_header_alignment(rich_table_html):
    controls = TableControls(rich_table_html)
    first = controls.display_rows()[0]

    assert [cell.alignment for cell in first] == [Alignment.LEFT, Alignment.RIGHT, Alignment.NONE]
    assert first[0].html == "Ann"


def test_empty_markup_has_no_data():
    controls = TableControls("<p>not a table</p>")

    assert not controls.has_data
    assert controls.rows == []
    assert controls.display_rows() == []
    assert controls.unique_values_map() == {}


@pytest.mark.parametrize(
    "kwargs",
    [
        {"search_debounce_seconds": -0.1},
        {"parser": "not-a-parser"},
        {"collation_locale": ""},
    ],
)
def test_invalid_config_is_rejected(kwargs):
    with pytest.raises(ValueError):
        TableControlsConfig(**kwargs)


def test_filter_values_follow_collation_locale():
    html = (
        "<table><thead><tr><th>Fruit</th></tr></thead><tbody>"
        "<tr><td>Apple</td></tr><tr><td>Яблоко</td></tr><tr><td>банан</td></tr></tbody></table>"
    )

    assert TableControls(html).unique_values(0) == ["банан", "Яблоко", "Apple"]
    english = TableControls(html, TableControlsConfig(collation_locale="en"))
    assert english.unique_values(0) == ["Apple", "банан", "Яблоко"]
