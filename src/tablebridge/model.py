"""Intermediate table model shared by both conversion directions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

ALIGN_LEFT = "left"
ALIGN_CENTER = "center"
ALIGN_RIGHT = "right"
ALIGNMENTS = frozenset({ALIGN_LEFT, ALIGN_CENTER, ALIGN_RIGHT})


@dataclass
class Cell:
    content: str = ""
    colspan: int = 1
    rowspan: int = 1


@dataclass
class Row:
    cells: List[Cell] = field(default_factory=list)
    is_header: bool = False


@dataclass
class Table:
    rows: List[Row] = field(default_factory=list)
    alignments: List[str] = field(default_factory=list)


def create_cell(content: str = "", colspan: int = 1, rowspan: int = 1) -> Cell:
    return Cell(content=content, colspan=colspan, rowspan=rowspan)


def create_row(cells: Optional[List[Cell]] = None, is_header: bool = False) -> Row:
    return Row(cells=list(cells) if cells is not None else [], is_header=is_header)


def create_table(rows: Optional[List[Row]] = None, alignments: Optional[List[str]] = None) -> Table:
    return Table(
        rows=list(rows) if rows is not None else [],
        alignments=list(alignments) if alignments is not None else [],
    )


def _row_width(row: Row) -> int:
    return sum(cell.colspan for cell in row.cells)


def get_column_count(table: Table) -> int:
    return max((_row_width(row) for row in table.rows), default=0)


def normalize_table(table: Table) -> Table:
    """Pad short rows and fit the alignment list to the column count.

    Mutates ``table`` in place and returns it. Running it twice is a no-op the
    second time.
    """
    col_count = get_column_count(table)

    for row in table.rows:
        missing = col_count - _row_width(row)
        if missing > 0:
            row.cells.extend(create_cell() for _ in range(missing))

    if len(table.alignments) < col_count:
        table.alignments.extend([ALIGN_LEFT] * (col_count - len(table.alignments)))
    del table.alignments[col_count:]

    return table
