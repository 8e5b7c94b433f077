import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..errors import ConfigurationError
from .settings import DEFAULT_FEATURES, DEFAULT_TITLE

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def _require_str(data: dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{where}: '{key}' must be a non-empty string")
    return value


def _optional_str(data: dict[str, Any], key: str, where: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{where}: '{key}' must be a string")
    return value or None


def _str_list(data: dict[str, Any], key: str, where: str) -> tuple[str, ...]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(f"{where}: '{key}' must be a list of strings")
    return tuple(value)


@dataclass(frozen=True)
class Benchmark:
    """A runnable scenario: one example program plus its arguments.

    Identity is `(example, arguments)`; `label` is display-only.
    """

    example: str
    arguments: tuple[str, ...] = ()
    label: str | None = field(default=None, compare=False)

    @property
    def display_label(self) -> str:
        if self.label:
            return self.label
        return " ".join((self.example, *self.arguments))

    @classmethod
    def from_dict(cls, data: dict[str, Any], index: int = 0) -> "Benchmark":
        where = f"benches[{index}]"
        if not isinstance(data, dict):
            raise ConfigurationError(f"{where}: expected a table")
        return cls(
            example=_require_str(data, "example", where),
            arguments=_str_list(data, "example_args", where),
            label=_optional_str(data, "label", where),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"example": self.example, "example_args": list(self.arguments)}
        if self.label:
            d["label"] = self.label
        return d


@dataclass(frozen=True)
class Revision:
    """A source-control point to benchmark. Identity is `commit` alone."""

    commit: str
    label: str | None = field(default=None, compare=False)

    @property
    def display_label(self) -> str:
        return self.label or self.commit

    @classmethod
    def from_dict(cls, data: dict[str, Any], index: int = 0) -> "Revision":
        where = f"commits[{index}]"
        if not isinstance(data, dict):
            raise ConfigurationError(f"{where}: expected a table")
        return cls(
            commit=_require_str(data, "commit", where),
            label=_optional_str(data, "label", where),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"commit": self.commit}
        if self.label:
            d["label"] = self.label
        return d


@dataclass(frozen=True)
class Patch:
    """A static source patch applied after every checkout."""

    name: str
    text: str


@dataclass(frozen=True)
class BenchConfig:
    revisions: tuple[Revision, ...]
    benchmarks: tuple[Benchmark, ...]
    frames: int
    patches: tuple[Patch, ...] = ()
    features: tuple[str, ...] = DEFAULT_FEATURES
    title: str = DEFAULT_TITLE

    def validate(self) -> None:
        """Reject configurations the runner cannot benchmark.

        Raises:
            ConfigurationError: Empty lists, duplicate identities or a
                non-positive frame budget.
        """
        if not self.benchmarks:
            raise ConfigurationError("At least one bench must be configured.")
        if not self.revisions:
            raise ConfigurationError("At least one commit must be configured.")
        if self.frames <= 0:
            raise ConfigurationError(f"'frames' must be positive, got {self.frames}")

        seen_benches: set[Benchmark] = set()
        for bench in self.benchmarks:
            if bench in seen_benches:
                raise ConfigurationError(f"Duplicate bench: {bench.display_label}")
            seen_benches.add(bench)

        seen_commits: set[Revision] = set()
        for rev in self.revisions:
            if rev in seen_commits:
                raise ConfigurationError(f"Duplicate commit: {rev.commit}")
            seen_commits.add(rev)

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path | None = None) -> "BenchConfig":
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration root must be a table")

        commits = data.get("commits", [])
        benches = data.get("benches", [])
        if not isinstance(commits, list) or not isinstance(benches, list):
            raise ConfigurationError("'commits' and 'benches' must be arrays of tables")

        frames = data.get("frames")
        if isinstance(frames, bool) or not isinstance(frames, int):
            raise ConfigurationError("'frames' must be an integer")

        title = data.get("title", DEFAULT_TITLE)
        if not isinstance(title, str):
            raise ConfigurationError("'title' must be a string")

        features = _str_list(data, "features", "config") if "features" in data else DEFAULT_FEATURES
        patch_paths = _str_list(data, "patches", "config")

        config = cls(
            revisions=tuple(Revision.from_dict(c, i) for i, c in enumerate(commits)),
            benchmarks=tuple(Benchmark.from_dict(b, i) for i, b in enumerate(benches)),
            frames=frames,
            patches=tuple(_read_patch(p, base_dir) for p in patch_paths),
            features=features,
            title=title,
        )
        config.validate()
        return config


def _read_patch(path_str: str, base_dir: Path | None) -> Patch:
    path = Path(path_str).expanduser()
    if not path.is_absolute() and base_dir is not None:
        path = base_dir / path
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Failed to read patch \"{path}\": {e}") from e
    return Patch(name=path.name, text=text)


def load_config(path: Path) -> BenchConfig:
    """Load and validate a benchmark definition file (TOML, or YAML by suffix).

    Patch paths are resolved relative to the file's directory.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Failed to read \"{path}\": {e}") from e

    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(raw) or {}
        else:
            data = tomllib.loads(raw)
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to deserialize \"{path}\": {e}") from e

    config = BenchConfig.from_dict(data, base_dir=path.resolve().parent)
    logger.debug(
        "Loaded %s: %d commits, %d benches, %d patches, frames=%d",
        path,
        len(config.revisions),
        len(config.benchmarks),
        len(config.patches),
        config.frames,
    )
    return config
