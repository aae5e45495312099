from foxmarks.table import column_widths, render_table

HEADER = ["url", "title", "folder", "id", "parent"]


def test_column_widths_take_longest_cell():
    rows = [HEADER, ["https://github.com/vaguecoder", "Vague Coder", "Profiles/GitHub", "1", "0"]]
    assert column_widths(rows) == [
        len("https://github.com/vaguecoder"),
        len("Vague Coder"),
        len("Profiles/GitHub"),
        len("id"),
        len("parent"),
    ]


def test_no_rows_renders_nothing():
    assert render_table([], header_separator=True) == []
    assert render_table([], header_separator=False) == []


def test_header_only_has_no_separator():
    expected = [
        "--------------------------------------",
        "| url | title | folder | id | parent |",
        "--------------------------------------",
    ]
    assert render_table([HEADER], header_separator=True) == expected
    assert render_table([HEADER], header_separator=False) == expected


def test_cells_are_padded_and_header_separated():
    rows = [["URL", "TITLE"], ["a", "bb"], ["ccc", ""]]
    assert render_table(rows, header_separator=True) == [
        "---------------",
        "| URL | TITLE |",
        "---------------",
        "| a   | bb    |",
        "| ccc |       |",
        "---------------",
    ]


def test_without_header_separator():
    rows = [["URL", "TITLE"], ["a", "bb"]]
    assert render_table(rows, header_separator=False) == [
        "---------------",
        "| URL | TITLE |",
        "| a   | bb    |",
        "---------------",
    ]
