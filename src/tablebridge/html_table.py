"""HTML ``<table>`` parsing (with span expansion) and rendering."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Set

from bs4.element import NavigableString, PreformattedString, Tag

from .model import (
    ALIGN_LEFT,
    ALIGNMENTS,
    Cell,
    Row,
    Table,
    create_cell,
    create_row,
    create_table,
    normalize_table,
)

LOG = logging.getLogger(__name__)

WHITESPACE_RE = re.compile(r"\s+")
TEXT_ALIGN_RE = re.compile(r"text-align\s*:\s*([a-z-]+)", re.IGNORECASE)

# Elements whose boundaries separate words in the flattened cell text.
BREAKING_TAGS = frozenset(
    {
        "address",
        "article",
        "blockquote",
        "br",
        "dd",
        "div",
        "dl",
        "dt",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "hr",
        "li",
        "ol",
        "p",
        "pre",
        "section",
        "ul",
    }
)

# Upper bounds browsers apply to span attributes.
MAX_COLSPAN = 1000
MAX_ROWSPAN = 65534


@dataclass
class _Carry:
    remaining: int = 0


@dataclass(frozen=True)
class HtmlStyle:
    table: str = "border-collapse: collapse; border: 1px solid black;"
    cell: str = "border: 1px solid black; padding: 6px 12px;"
    header: str = "font-weight: bold;"


DEFAULT_HTML_STYLE = HtmlStyle()


def _collect_text(node: Tag, parts: List[str]) -> None:
    for child in node.children:
        if isinstance(child, Tag):
            breaking = child.name in BREAKING_TAGS
            if breaking:
                parts.append(" ")
            _collect_text(child, parts)
            if breaking:
                parts.append(" ")
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            parts.append(str(child))


def cell_text(cell_el: Tag) -> str:
    """Flatten a cell to a single line of plain text."""
    parts: List[str] = []
    _collect_text(cell_el, parts)
    return WHITESPACE_RE.sub(" ", "".join(parts)).strip()


def _span_attr(cell_el: Tag, name: str, limit: int) -> int:
    raw = cell_el.get(name)
    if raw is None:
        return 1
    try:
        value = int(str(raw).strip())
    except ValueError:
        return 1
    if value < 1:
        return 1
    return min(value, limit)


def explicit_alignment(el: Tag) -> Optional[str]:
    """Alignment from the ``align`` attribute or inline ``text-align`` style, if any."""
    raw = el.get("align")
    if not raw:
        match = TEXT_ALIGN_RE.search(str(el.get("style") or ""))
        raw = match.group(1) if match else None
    if not raw:
        return None
    value = str(raw).strip().lower()
    return value if value in ALIGNMENTS else None


def cell_alignment(cell_el: Tag) -> str:
    return explicit_alignment(cell_el) or ALIGN_LEFT


def own_rows(table_el: Tag) -> List[Tag]:
    """Rows of ``table_el``; rows of nested tables belong to their cell."""
    return [tr for tr in table_el.find_all("tr") if tr.find_parent("table") is table_el]


def has_merged_cells(table_el: Tag) -> bool:
    for tr in own_rows(table_el):
        for cell_el in tr.find_all(["td", "th"], recursive=False):
            if _span_attr(cell_el, "colspan", MAX_COLSPAN) > 1 or _span_attr(cell_el, "rowspan", MAX_ROWSPAN) > 1:
                return True
    return False


def _owes_filler(ledger: List[_Carry], col: int) -> bool:
    return col < len(ledger) and ledger[col].remaining > 0


def _set_carry(ledger: List[_Carry], col: int, remaining: int) -> None:
    while len(ledger) <= col:
        ledger.append(_Carry())
    ledger[col].remaining = remaining


def html_table_to_model(table_el: Optional[Tag]) -> Optional[Table]:
    """Convert a ``<table>`` tag to a normalized :class:`Table`.

    Merged cells are expanded: a ``colspan`` produces empty siblings to the
    right, a ``rowspan`` produces empty cells in the same columns of the rows
    below. Returns ``None`` when the table has no rows.
    """
    if table_el is None:
        return None

    tr_elements = own_rows(table_el)
    if not tr_elements:
        LOG.debug("HTML table has no rows")
        return None

    thead_rows: Set[int] = {id(tr) for tr in tr_elements if tr.find_parent(["thead", "table"]).name == "thead"}
    first_row_is_header = not thead_rows

    rows: List[Row] = []
    alignments: List[str] = []
    alignments_frozen = False
    ledger: List[_Carry] = []

    for row_idx, tr in enumerate(tr_elements):
        is_header = id(tr) in thead_rows or (first_row_is_header and row_idx == 0)
        capture = is_header and not alignments_frozen
        cell_elements = tr.find_all(["td", "th"], recursive=False)

        cells: List[Cell] = []
        row_alignments: List[str] = []
        col = 0
        el_idx = 0

        while el_idx < len(cell_elements) or _owes_filler(ledger, col):
            if _owes_filler(ledger, col):
                cells.append(create_cell())
                ledger[col].remaining -= 1
                row_alignments.append(ALIGN_LEFT)
                col += 1
                continue

            cell_el = cell_elements[el_idx]
            el_idx += 1

            content = cell_text(cell_el)
            colspan = _span_attr(cell_el, "colspan", MAX_COLSPAN)
            rowspan = _span_attr(cell_el, "rowspan", MAX_ROWSPAN)
            align = cell_alignment(cell_el) if capture else ALIGN_LEFT

            for offset in range(colspan):
                cells.append(create_cell(content if offset == 0 else ""))
                if rowspan > 1:
                    _set_carry(ledger, col, rowspan - 1)
                row_alignments.append(align)
                col += 1

        if capture:
            alignments = row_alignments
            alignments_frozen = True

        rows.append(create_row(cells, is_header=is_header))

    table = normalize_table(create_table(rows, alignments))
    LOG.debug("Parsed HTML table: %d row(s), %d column(s)", len(table.rows), len(table.alignments))
    return table


def escape_html(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def _cell_html(tag: str, cell: Cell, alignment: str, style: HtmlStyle) -> str:
    css = f"{style.cell} text-align: {alignment};"
    if tag == "th":
        css = f"{css} {style.header}"
    return f'      <{tag} style="{escape_html(css)}">{escape_html(cell.content)}</{tag}>'


def _section_html(section: str, tag: str, rows: List[Row], table: Table, style: HtmlStyle) -> List[str]:
    lines = [f"  <{section}>"]
    for row in rows:
        lines.append("    <tr>")
        for idx, cell in enumerate(row.cells):
            alignment = table.alignments[idx] if idx < len(table.alignments) else ALIGN_LEFT
            lines.append(_cell_html(tag, cell, alignment or ALIGN_LEFT, style))
        lines.append("    </tr>")
    lines.append(f"  </{section}>")
    return lines


def table_model_to_html(table: Table, style: HtmlStyle = DEFAULT_HTML_STYLE) -> str:
    header_rows = [row for row in table.rows if row.is_header]
    data_rows = [row for row in table.rows if not row.is_header]

    lines = [f'<table style="{escape_html(style.table)}">']
    if header_rows:
        lines.extend(_section_html("thead", "th", header_rows, table, style))
    if data_rows:
        lines.extend(_section_html("tbody", "td", data_rows, table, style))
    lines.append("</table>")
    return "\n".join(lines)
