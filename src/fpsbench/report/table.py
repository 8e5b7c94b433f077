from collections.abc import Sequence

from ..config import DEFAULT_TITLE, Benchmark, Revision
from ..runner.results import ResultStore

Table = list[list[str]]

GLYPH_NEUTRAL = "🟡"
GLYPH_DOWN = "🔴"
GLYPH_UP = "🟢"

# Changes smaller than 1% are reported as noise
NEUTRAL_BAND = 0.01


def trend_glyph(delta: float) -> str:
    if abs(delta) < NEUTRAL_BAND:
        return GLYPH_NEUTRAL
    if delta < 0:
        return GLYPH_DOWN
    return GLYPH_UP


def format_delta_cell(value: float, baseline: float) -> str:
    """Format `value` with its trend glyph and percent change versus `baseline`."""
    delta = (value - baseline) / baseline
    sign = "+" if delta > 0 else ""
    return f"{value:.2f} {trend_glyph(delta)} {sign}{delta * 100:.1f}%"


def transpose(table: Table) -> Table:
    if not table:
        return []
    return [list(column) for column in zip(*table, strict=True)]


def build_table(
    revisions: Sequence[Revision],
    benchmarks: Sequence[Benchmark],
    results: ResultStore,
    *,
    title: str = DEFAULT_TITLE,
) -> Table:
    """Lay out results with commits as rows and benches as columns.

    The first commit is the baseline; its row shows raw values only. When there
    are more benches than rows the grid is transposed so the long axis runs
    vertically.

    Raises:
        ResultMissing: A configured pair has no recorded value.
    """
    header = [title, *(bench.display_label for bench in benchmarks)]
    table: Table = [header]

    for i, revision in enumerate(revisions):
        row = [revision.display_label]
        for bench in benchmarks:
            value = results.get(bench, revision)
            if i == 0:
                row.append(f"{value:.2f}")
            else:
                row.append(format_delta_cell(value, results.get(bench, revisions[0])))
        table.append(row)

    if len(header) > len(table):
        table = transpose(table)
    return table
