"""Clean word-processor markup down to a plain ``<table>`` element."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import PreformattedString, Tag

from .html_table import explicit_alignment

LOG = logging.getLogger(__name__)

# Follows the HTML rules for omitted end tags such as <td>a<td>b.
HTML_PARSER = "lxml"
TABLE_TAG_RE = re.compile(r"<table[\s>]", re.IGNORECASE)

DROPPED_TAGS = ["script", "style", "col", "colgroup"]
STRIPPED_ATTRS = ("style", "class", "width", "height", "valign")
STRIPPED_TABLE_ATTRS = ("style", "class", "width", "cellspacing", "cellpadding")


@dataclass
class SanitizedTable:
    table: Tag
    table_count: int


def contains_table(markup: Optional[str]) -> bool:
    if not markup:
        return False
    return TABLE_TAG_RE.search(markup) is not None


def _top_level_tables(soup: BeautifulSoup) -> List[Tag]:
    return [table for table in soup.find_all("table") if table.find_parent("table") is None]


def _clean_element(el: Tag) -> None:
    align = explicit_alignment(el)
    for attr in STRIPPED_ATTRS:
        if attr in el.attrs:
            del el[attr]
    if align:
        el["align"] = align


def sanitize_table_html(markup: Optional[str]) -> Optional[SanitizedTable]:
    """Return the first table of ``markup`` stripped of presentational noise.

    Namespaced tags such as ``<o:p>`` are unwrapped, column definitions,
    scripts, styles and comments are removed, and alignment is kept as an
    ``align`` attribute. Returns ``None`` when there is no table.
    """
    if not markup or not markup.strip():
        return None

    soup = BeautifulSoup(markup, HTML_PARSER)
    tables = _top_level_tables(soup)
    if not tables:
        LOG.debug("No <table> element found in markup")
        return None

    table = tables[0]

    for node in table.find_all(string=lambda s: isinstance(s, PreformattedString)):
        node.extract()
    for tag in table.find_all(DROPPED_TAGS):
        tag.extract()
    for tag in table.find_all(lambda t: ":" in t.name):
        tag.unwrap()
    for el in table.find_all(True):
        _clean_element(el)
    for attr in STRIPPED_TABLE_ATTRS:
        if attr in table.attrs:
            del table[attr]

    LOG.debug("Sanitized first of %d table(s)", len(tables))
    return SanitizedTable(table=table, table_count=len(tables))
