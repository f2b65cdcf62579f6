import pytest

from tablebridge.markdown_table import parse_cells, parse_markdown_table, table_model_to_markdown
from tablebridge.model import Cell, Row, Table, create_cell, create_row, create_table


def _contents(table):
    return [[cell.content for cell in row.cells] for row in table.rows]


def test_parse_simple_table():
    md = """
| Name | Age | City    |
|------|-----|---------|
| Alice| 30  | New York|
| Bob  | 25  | London  |
    """
    table = parse_markdown_table(md)

    assert table is not None
    assert [row.is_header for row in table.rows] == [True, False, False]
    assert _contents(table) == [
        ["Name", "Age", "City"],
        ["Alice", "30", "New York"],
        ["Bob", "25", "London"],
    ]
    assert table.alignments == ["left", "left", "left"]


def test_parse_alignments():
    md = "| Left | Center | Right | Lead |\n|:-----|:------:|------:|:--|\n| a | b | c | d |"
    table = parse_markdown_table(md)
    assert table.alignments == ["left", "center", "right", "left"]


def test_parse_unescapes_pipes():
    md = "| Expression | Result |\n|------------|--------|\n| a \\| b     | true   |"
    table = parse_markdown_table(md)
    assert table.rows[1].cells[0].content == "a | b"
    assert table.rows[1].cells[1].content == "true"


def test_parse_pads_short_rows():
    table = parse_markdown_table("| A | B | C |\n|---|---|---|\n| 1 | 2 |")
    assert len(table.rows[1].cells) == 3
    assert table.rows[1].cells[2].content == ""


def test_parse_widens_to_longest_row():
    table = parse_markdown_table("| A |\n|:-:|\n| 1 | 2 |")
    assert _contents(table) == [["A", ""], ["1", "2"]]
    assert table.alignments == ["center", "left"]


def test_parse_header_only_table():
    table = parse_markdown_table("| A | B |\n|---|---|")
    assert table is not None
    assert len(table.rows) == 1
    assert table.rows[0].is_header is True


def test_parse_multiple_header_lines():
    table = parse_markdown_table("| Group | |\n| A | B |\n|---|---|\n| 1 | 2 |")
    assert [row.is_header for row in table.rows] == [True, True, False]


def test_parse_ignores_blank_lines():
    table = parse_markdown_table("\n| A |\n\n|---|\n\n| 1 |\n\n")
    assert _contents(table) == [["A"], ["1"]]


def test_parse_handles_crlf_line_endings():
    table = parse_markdown_table("| A | B |\r\n|---|---|\r\n| 1 | 2 |\r\n")
    assert _contents(table) == [["A", "B"], ["1", "2"]]


def test_parse_splits_rows_on_newlines_only():
    table = parse_markdown_table("| x\x0cy | z |\n|---|---|\n| 1\u2028 2 | 3 |")
    assert len(table.rows) == 2
    assert table.rows[0].cells[0].content == "x\x0cy"
    assert table.rows[1].cells[0].content == "1\u2028 2"


@pytest.mark.parametrize(
    "text",
    [
        "",
        None,
        "not a table",
        "| A | B |",
        "| A | B |\n| 1 | 2 |",
        "   \n\t\n",
    ],
)
def test_parse_returns_none_without_table(text):
    assert parse_markdown_table(text) is None


def test_parse_cells_without_outer_pipes():
    assert parse_cells("a | b") == ["a", "b"]


def test_generate_pads_columns():
    table = parse_markdown_table("| Name | Age |\n|---|---|\n| Alice | 30 |")
    assert table_model_to_markdown(table) == "| Name  | Age |\n|-------|-----|\n| Alice | 30  |"


def test_generate_alignment_markers():
    table = parse_markdown_table("| Left | Center | Right |\n|:-----|:------:|------:|\n| a | b | c |")
    lines = table_model_to_markdown(table).split("\n")
    assert lines[1] == "|------|:------:|------:|"
    assert all(len(line) == len(lines[0]) for line in lines)


def test_generate_escapes_pipes():
    table = Table(
        rows=[
            Row(cells=[Cell("Col")], is_header=True),
            Row(cells=[Cell("a | b")]),
        ],
        alignments=["left"],
    )
    output = table_model_to_markdown(table)
    assert "a \\| b" in output
    assert parse_markdown_table(output).rows[1].cells[0].content == "a | b"


def test_generate_promotes_first_row_without_headers():
    table = create_table(
        [create_row([create_cell("h1"), create_cell("h2")]), create_row([create_cell("1"), create_cell("2")])],
        ["left", "left"],
    )
    assert table_model_to_markdown(table).split("\n") == [
        "| h1  | h2  |",
        "|-----|-----|",
        "| 1   | 2   |",
    ]


def test_generate_separator_follows_all_header_rows():
    table = parse_markdown_table("| G | |\n| A | B |\n|---|---|\n| 1 | 2 |")
    lines = table_model_to_markdown(table).split("\n")
    assert lines[2].startswith("|---")
    assert len(lines) == 4


def test_generate_tolerates_missing_alignments():
    table = create_table([create_row([create_cell("a"), create_cell("b")], is_header=True)])
    assert table_model_to_markdown(table) == "| a   | b   |\n|-----|-----|"


def test_generate_empty_table_is_empty_string():
    assert table_model_to_markdown(create_table()) == ""
    assert table_model_to_markdown(None) == ""
