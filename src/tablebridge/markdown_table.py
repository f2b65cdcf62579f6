"""Pipe-table Markdown parsing and rendering."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from .model import (
    ALIGN_CENTER,
    ALIGN_LEFT,
    ALIGN_RIGHT,
    Row,
    Table,
    create_cell,
    create_row,
    create_table,
    get_column_count,
    normalize_table,
)

LOG = logging.getLogger(__name__)

SEPARATOR_RE = re.compile(r"^\|[\s:|-]+\|$")
CELL_SPLIT_RE = re.compile(r"(?<!\\)\|")
MIN_COLUMN_WIDTH = 3


def _strip_outer_pipes(line: str) -> str:
    if line.startswith("|"):
        line = line[1:]
    if line.endswith("|"):
        line = line[:-1]
    return line


def _parse_alignment(segment: str) -> str:
    trimmed = segment.strip()
    left = trimmed.startswith(":")
    right = trimmed.endswith(":")
    if left and right:
        return ALIGN_CENTER
    if right:
        return ALIGN_RIGHT
    # A leading colon alone keeps the default.
    return ALIGN_LEFT


def parse_alignments(separator_line: str) -> List[str]:
    return [_parse_alignment(seg) for seg in _strip_outer_pipes(separator_line).split("|")]


def parse_cells(line: str) -> List[str]:
    parts = CELL_SPLIT_RE.split(_strip_outer_pipes(line))
    return [part.strip().replace("\\|", "|") for part in parts]


def _find_separator(lines: List[str]) -> int:
    for idx, line in enumerate(lines):
        if SEPARATOR_RE.match(line):
            return idx
    return -1


def parse_markdown_table(text: Optional[str]) -> Optional[Table]:
    """Parse a pipe table into a normalized :class:`Table`.

    Returns ``None`` for empty input, fewer than two non-blank lines, or when
    no separator row is present.
    """
    if not text:
        LOG.debug("Markdown input is empty")
        return None

    lines = [line.strip() for line in text.split("\n")]
    lines = [line for line in lines if line]
    if len(lines) < 2:
        LOG.debug("Markdown input has %d non-blank line(s), need at least 2", len(lines))
        return None

    sep_idx = _find_separator(lines)
    if sep_idx < 0:
        LOG.debug("No Markdown separator row found")
        return None

    rows: List[Row] = []
    for line in lines[:sep_idx]:
        rows.append(create_row([create_cell(c) for c in parse_cells(line)], is_header=True))
    for line in lines[sep_idx + 1 :]:
        rows.append(create_row([create_cell(c) for c in parse_cells(line)], is_header=False))

    table = normalize_table(create_table(rows, parse_alignments(lines[sep_idx])))
    LOG.debug(
        "Parsed Markdown table: %d header row(s), %d data row(s), %d column(s)",
        sep_idx,
        len(lines) - sep_idx - 1,
        len(table.alignments),
    )
    return table


def escape_markdown_cell(content: str) -> str:
    return content.replace("|", "\\|")


def _separator_segment(alignment: str, width: int) -> str:
    if alignment == ALIGN_CENTER:
        return ":" + "-" * width + ":"
    if alignment == ALIGN_RIGHT:
        return "-" * width + "-:"
    return "-" * (width + 2)


def _render_row(row: Row, widths: List[int]) -> str:
    parts: List[str] = []
    for idx, width in enumerate(widths):
        content = escape_markdown_cell(row.cells[idx].content) if idx < len(row.cells) else ""
        parts.append(" " + content.ljust(width) + " ")
    return "|" + "|".join(parts) + "|"


def table_model_to_markdown(table: Optional[Table]) -> str:
    if table is None or not table.rows:
        return ""

    col_count = max(len(table.alignments), get_column_count(table))

    widths = [MIN_COLUMN_WIDTH] * col_count
    for row in table.rows:
        for idx, cell in enumerate(row.cells[:col_count]):
            widths[idx] = max(widths[idx], len(escape_markdown_cell(cell.content)))

    header_rows = [row for row in table.rows if row.is_header]
    data_rows = [row for row in table.rows if not row.is_header]
    if not header_rows:
        header_rows = table.rows[:1]
        data_rows = table.rows[1:]

    lines = [_render_row(row, widths) for row in header_rows]
    alignments = [
        table.alignments[idx] if idx < len(table.alignments) else ALIGN_LEFT for idx in range(col_count)
    ]
    lines.append("|" + "|".join(_separator_segment(a, w) for a, w in zip(alignments, widths)) + "|")
    lines.extend(_render_row(row, widths) for row in data_rows)
    return "\n".join(lines)
