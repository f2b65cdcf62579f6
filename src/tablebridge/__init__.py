"""Convert tables between Markdown pipe syntax and HTML."""

from .core import MarkdownResult, html_to_markdown, markdown_to_html
from .html_table import DEFAULT_HTML_STYLE, HtmlStyle, html_table_to_model, table_model_to_html
from .markdown_table import parse_markdown_table, table_model_to_markdown
from .model import (
    ALIGN_CENTER,
    ALIGN_LEFT,
    ALIGN_RIGHT,
    Cell,
    Row,
    Table,
    create_cell,
    create_row,
    create_table,
    get_column_count,
    normalize_table,
)
from .sanitizer import SanitizedTable, contains_table, sanitize_table_html
from .version import __version__

__all__ = [
    "ALIGN_CENTER",
    "ALIGN_LEFT",
    "ALIGN_RIGHT",
    "Cell",
    "DEFAULT_HTML_STYLE",
    "HtmlStyle",
    "MarkdownResult",
    "Row",
    "SanitizedTable",
    "Table",
    "__version__",
    "contains_table",
    "create_cell",
    "create_row",
    "create_table",
    "get_column_count",
    "html_table_to_model",
    "html_to_markdown",
    "markdown_to_html",
    "normalize_table",
    "parse_markdown_table",
    "sanitize_table_html",
    "table_model_to_html",
    "table_model_to_markdown",
]
