"""Comparison report: table layout and markdown rendering."""

from .markdown import iter_markdown_lines, render_markdown
from .table import Table, build_table, format_delta_cell, transpose, trend_glyph

__all__ = [
    "Table",
    "build_table",
    "format_delta_cell",
    "iter_markdown_lines",
    "render_markdown",
    "transpose",
    "trend_glyph",
]
