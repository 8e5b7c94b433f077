from pathlib import Path

import pytest

from fpsbench.config import BenchConfig, Benchmark, Revision
from fpsbench.runner.results import ResultStore


@pytest.fixture
def revisions() -> tuple[Revision, ...]:
    return (
        Revision(commit="abc123", label="old"),
        Revision(commit="def456", label="new"),
    )


@pytest.fixture
def benchmarks() -> tuple[Benchmark, ...]:
    return (Benchmark(example="bench_a", label="Bench A"),)


@pytest.fixture
def bench_config(
    revisions: tuple[Revision, ...], benchmarks: tuple[Benchmark, ...]
) -> BenchConfig:
    return BenchConfig(revisions=revisions, benchmarks=benchmarks, frames=100)


@pytest.fixture
def filled_store(
    revisions: tuple[Revision, ...], benchmarks: tuple[Benchmark, ...]
) -> ResultStore:
    store = ResultStore(benchmarks, revisions)
    store.record(benchmarks[0], revisions[0], 100.0)
    store.record(benchmarks[0], revisions[1], 110.0)
    return store


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "fpsbench.toml"
    path.write_text(
        """
frames = 500

[[commits]]
commit = "abc123"
label = "old"

[[commits]]
commit = "def456"

[[benches]]
example = "many_cubes"
example_args = ["--benchmark", "sphere"]

[[benches]]
example = "bench_a"
label = "Bench A"
""",
        encoding="utf-8",
    )
    return path
