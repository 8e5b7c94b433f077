import pytest

from fpsbench.config import Benchmark, Revision
from fpsbench.errors import ResultMissing
from fpsbench.report.table import (
    GLYPH_DOWN,
    GLYPH_NEUTRAL,
    GLYPH_UP,
    build_table,
    format_delta_cell,
    transpose,
    trend_glyph,
)
from fpsbench.runner.results import ResultStore


def _store(benchmarks, revisions, value=lambda b, r: 100.0 + 10 * r) -> ResultStore:
    store = ResultStore(benchmarks, revisions)
    for bi, bench in enumerate(benchmarks):
        for ri, rev in enumerate(revisions):
            store.record(bench, rev, value(bi, ri))
    return store


def _benches(n: int) -> tuple[Benchmark, ...]:
    return tuple(Benchmark(example=f"ex{i}", label=f"B{i}") for i in range(n))


def _revs(n: int) -> tuple[Revision, ...]:
    return tuple(Revision(commit=f"c{i}", label=f"R{i}") for i in range(n))


class TestTrendGlyph:
    @pytest.mark.parametrize(
        ("delta", "glyph"),
        [
            (0.0, GLYPH_NEUTRAL),
            (0.0099, GLYPH_NEUTRAL),
            (-0.0099, GLYPH_NEUTRAL),
            (0.01, GLYPH_UP),
            (0.0101, GLYPH_UP),
            (-0.01, GLYPH_DOWN),
            (-0.5, GLYPH_DOWN),
        ],
    )
    def test_neutral_band_boundary(self, delta: float, glyph: str) -> None:
        assert trend_glyph(delta) == glyph


class TestFormatDeltaCell:
    def test_improvement(self) -> None:
        assert format_delta_cell(110.0, 100.0) == f"110.00 {GLYPH_UP} +10.0%"

    def test_regression_carries_minus(self) -> None:
        assert format_delta_cell(90.0, 100.0) == f"90.00 {GLYPH_DOWN} -10.0%"

    def test_exact_one_percent_is_up(self) -> None:
        assert format_delta_cell(101.0, 100.0) == f"101.00 {GLYPH_UP} +1.0%"

    def test_small_change_is_neutral(self) -> None:
        assert format_delta_cell(100.5, 100.0) == f"100.50 {GLYPH_NEUTRAL} +0.5%"

    def test_no_change_has_no_sign(self) -> None:
        assert format_delta_cell(100.0, 100.0) == f"100.00 {GLYPH_NEUTRAL} 0.0%"


class TestBuildTable:
    def test_end_to_end_layout(self, revisions, benchmarks, filled_store) -> None:
        table = build_table(revisions, benchmarks, filled_store, title="fpsbench")
        assert table == [
            ["fpsbench", "Bench A"],
            ["old", "100.00"],
            ["new", f"110.00 {GLYPH_UP} +10.0%"],
        ]

    def test_baseline_row_has_no_trend(self) -> None:
        benches, revs = _benches(2), _revs(4)
        store = _store(benches, revs, value=lambda b, r: [100.0, 50.0, 150.0, 100.2][r])
        table = build_table(revs, benches, store)
        assert table[1][1:] == ["100.00", "100.00"]
        assert table[2][1] == f"50.00 {GLYPH_DOWN} -50.0%"
        assert table[3][1] == f"150.00 {GLYPH_UP} +50.0%"
        assert table[4][1] == f"100.20 {GLYPH_NEUTRAL} +0.2%"

    def test_baseline_is_per_bench(self) -> None:
        benches, revs = _benches(2), _revs(2)
        store = _store(benches, revs, value=lambda b, r: [[10.0, 20.0], [200.0, 100.0]][b][r])
        table = build_table(revs, benches, store)
        assert table[2] == ["R1", f"20.00 {GLYPH_UP} +100.0%", f"100.00 {GLYPH_DOWN} -50.0%"]

    def test_wide_config_is_transposed(self) -> None:
        benches, revs = _benches(5), _revs(2)
        table = build_table(revs, benches, _store(benches, revs), title="t")
        assert len(table) == 6
        assert table[0] == ["t", "R0", "R1"]
        assert [row[0] for row in table[1:]] == ["B0", "B1", "B2", "B3", "B4"]
        assert table[1] == ["B0", "100.00", f"110.00 {GLYPH_UP} +10.0%"]

    def test_tall_config_is_not_transposed(self) -> None:
        benches, revs = _benches(2), _revs(5)
        table = build_table(revs, benches, _store(benches, revs), title="t")
        assert table[0] == ["t", "B0", "B1"]
        assert [row[0] for row in table[1:]] == ["R0", "R1", "R2", "R3", "R4"]

    def test_square_config_is_not_transposed(self) -> None:
        benches, revs = _benches(2), _revs(2)
        table = build_table(revs, benches, _store(benches, revs), title="t")
        assert table[0] == ["t", "B0", "B1"]

    def test_missing_result_raises(self, revisions, benchmarks) -> None:
        store = ResultStore(benchmarks, revisions)
        store.record(benchmarks[0], revisions[0], 100.0)
        with pytest.raises(ResultMissing):
            build_table(revisions, benchmarks, store)

    def test_derived_labels(self) -> None:
        benches = (Benchmark(example="many_cubes", arguments=("--benchmark", "sphere")),)
        revs = (Revision(commit="abc123"),)
        table = build_table(revs, benches, _store(benches, revs), title="t")
        assert table == [["t", "many_cubes --benchmark sphere"], ["abc123", "100.00"]]


class TestTranspose:
    def test_shape_swaps(self) -> None:
        table = [["a", "b", "c"], ["d", "e", "f"]]
        assert transpose(table) == [["a", "d"], ["b", "e"], ["c", "f"]]

    def test_twice_is_identity(self) -> None:
        table = [["a", "b", "c"], ["d", "e", "f"], ["g", "h", "i"], ["j", "k", "l"]]
        once = transpose(table)
        assert (len(once), len(once[0])) == (3, 4)
        assert transpose(once) == table

    def test_empty(self) -> None:
        assert transpose([]) == []
