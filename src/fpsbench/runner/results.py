import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..config import Benchmark, Revision
from ..errors import ResultConflict, ResultMissing, UnknownResultKey


class ResultStore:
    """Dense (benchmark, revision) -> fps matrix.

    Benchmarks and revisions are assigned integer positions from the configured
    order; values live in `_values[bench_idx][rev_idx]` and are write-once.
    """

    def __init__(self, benchmarks: Sequence[Benchmark], revisions: Sequence[Revision]):
        self.benchmarks = tuple(benchmarks)
        self.revisions = tuple(revisions)
        self._bench_index = {b: i for i, b in enumerate(self.benchmarks)}
        self._rev_index = {r: i for i, r in enumerate(self.revisions)}
        self._values: list[list[float | None]] = [
            [None] * len(self.revisions) for _ in self.benchmarks
        ]

    def _indices(self, benchmark: Benchmark, revision: Revision) -> tuple[int, int]:
        try:
            return self._bench_index[benchmark], self._rev_index[revision]
        except KeyError as e:
            raise UnknownResultKey(
                f"{benchmark.display_label} @ {revision.display_label} is not configured"
            ) from e

    def record(self, benchmark: Benchmark, revision: Revision, fps: float) -> None:
        b, r = self._indices(benchmark, revision)
        if self._values[b][r] is not None:
            raise ResultConflict(
                f"{benchmark.display_label} @ {revision.display_label} already recorded"
            )
        self._values[b][r] = fps

    def get(self, benchmark: Benchmark, revision: Revision) -> float:
        b, r = self._indices(benchmark, revision)
        value = self._values[b][r]
        if value is None:
            raise ResultMissing(
                f"No result for {benchmark.display_label} @ {revision.display_label}"
            )
        return value

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        b = self._bench_index.get(key[0])
        r = self._rev_index.get(key[1])
        return b is not None and r is not None and self._values[b][r] is not None

    def __len__(self) -> int:
        return sum(v is not None for row in self._values for v in row)

    def missing(self) -> list[tuple[Benchmark, Revision]]:
        return [
            (bench, rev)
            for bench, row in zip(self.benchmarks, self._values, strict=True)
            for rev, value in zip(self.revisions, row, strict=True)
            if value is None
        ]

    def is_complete(self) -> bool:
        return not self.missing()

    def to_dict(self) -> dict[str, Any]:
        return {
            "commits": [r.to_dict() for r in self.revisions],
            "benches": [b.to_dict() for b in self.benchmarks],
            "results": [
                {
                    "bench": bench.display_label,
                    "commit": rev.commit,
                    "fps": value,
                }
                for bench, row in zip(self.benchmarks, self._values, strict=True)
                for rev, value in zip(self.revisions, row, strict=True)
                if value is not None
            ],
        }

    def save(self, output_path: Path) -> None:
        """Write a JSON snapshot of the recorded values."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
            f.write("\n")
