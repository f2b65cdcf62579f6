"""Conversion entry points for tablebridge."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .html_table import DEFAULT_HTML_STYLE, HtmlStyle, has_merged_cells, html_table_to_model, table_model_to_html
from .markdown_table import parse_markdown_table, table_model_to_markdown
from .sanitizer import contains_table, sanitize_table_html

LOG = logging.getLogger("tablebridge")

EXIT_INVALID_ARGS = 6
EXIT_OUTPUT = 7
EXIT_NO_TABLE = 8

MERGED_CELLS_WARNING = "Merged cells were expanded into separate cells."

__all__ = [
    "EXIT_INVALID_ARGS",
    "EXIT_NO_TABLE",
    "EXIT_OUTPUT",
    "MarkdownResult",
    "contains_table",
    "html_to_markdown",
    "markdown_to_html",
    "setup_logging",
]


@dataclass
class MarkdownResult:
    markdown: str
    warnings: List[str] = field(default_factory=list)


def _resolve_log_level(verbose: bool, debug: bool) -> int:
    return logging.DEBUG if debug else (logging.INFO if verbose else logging.WARNING)


def _configure_tablebridge_logger(level: int) -> None:
    LOG.setLevel(level)
    LOG.propagate = False
    if not LOG.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        handler.setLevel(level)
        LOG.addHandler(handler)
    else:
        for handler in LOG.handlers:
            handler.setLevel(level)
            if handler.formatter is None:
                handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))


def setup_logging(verbose: bool, debug: bool) -> None:
    level = _resolve_log_level(verbose, debug)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    _configure_tablebridge_logger(level)


def multiple_tables_warning(table_count: int) -> str:
    return f"Found {table_count} tables; only the first was converted."


def markdown_to_html(text: Optional[str], style: HtmlStyle = DEFAULT_HTML_STYLE) -> Optional[str]:
    table = parse_markdown_table(text)
    if table is None:
        return None
    return table_model_to_html(table, style)


def html_to_markdown(markup: Optional[str]) -> Optional[MarkdownResult]:
    """Convert the first table found in ``markup`` to a Markdown pipe table.

    Returns ``None`` when no convertible table exists. Lossy but successful
    conversions (extra tables dropped, merged cells expanded) are reported in
    ``MarkdownResult.warnings``.
    """
    sanitized = sanitize_table_html(markup)
    if sanitized is None:
        return None

    table = html_table_to_model(sanitized.table)
    if table is None:
        return None

    warnings: List[str] = []
    if sanitized.table_count > 1:
        warnings.append(multiple_tables_warning(sanitized.table_count))
    if has_merged_cells(sanitized.table):
        warnings.append(MERGED_CELLS_WARNING)
    for warning in warnings:
        LOG.debug("Conversion warning: %s", warning)

    return MarkdownResult(markdown=table_model_to_markdown(table), warnings=warnings)
