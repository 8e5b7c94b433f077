from collections.abc import Iterator

from .table import Table


def _format_row(cells: list[str]) -> str:
    return "|" + "|".join(cells) + "|"


def iter_markdown_lines(table: Table) -> Iterator[str]:
    for i, row in enumerate(table):
        yield _format_row(row)
        if i == 0:
            yield _format_row(["-"] * len(row))


def render_markdown(table: Table) -> str:
    """Render `table` as a markdown grid; an empty table renders as ""."""
    return "\n".join(iter_markdown_lines(table))
