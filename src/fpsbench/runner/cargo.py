import logging
import os
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from ..config import CARGO_BIN, CI_CONFIG_PATH, Benchmark
from ..errors import ArtifactError, CheckoutError, RunError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunOutput:
    stdout: str
    stderr: str


def format_ci_config(frames: int) -> str:
    return f"(events: [({frames}, AppExit)])"


def write_ci_config(repo_path: Path, frames: int) -> Path:
    """Write the scratch config that makes every run exit after `frames` frames."""
    path = repo_path / CI_CONFIG_PATH
    try:
        path.write_text(format_ci_config(frames), encoding="utf-8")
    except OSError as e:
        raise ArtifactError(f"Failed to write CI config \"{path}\": {e}") from e
    return path


def build_run_command(benchmark: Benchmark, features: Sequence[str]) -> list[str]:
    cmd = [CARGO_BIN, "run", "--example", benchmark.example, "--release"]
    if features:
        cmd.extend(["--features", ",".join(features)])
    cmd.append("--")
    cmd.extend(benchmark.arguments)
    return cmd


def refresh_lockfile(repo_path: Path) -> None:
    cmd = [CARGO_BIN, "update"]
    try:
        completed = subprocess.run(  # nosec B603 B607
            cmd,
            cwd=repo_path,
            check=False,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        raise CheckoutError(f"cargo update could not start: {e}", command=cmd) from e
    if completed.returncode != 0:
        stderr = (completed.stderr or "").strip()
        details = f": {stderr}" if stderr else ""
        raise CheckoutError(
            f"cargo update failed (code {completed.returncode}){details}",
            command=cmd,
            returncode=completed.returncode,
        )


def run_example(
    benchmark: Benchmark,
    repo_path: Path,
    *,
    features: Sequence[str],
    env: Mapping[str, str],
) -> RunOutput:
    """Build and run one example, returning its captured output streams.

    `env` is merged over the parent environment for the child only.
    """
    cmd = build_run_command(benchmark, features)
    child_env = {**os.environ, **env}
    logger.debug("Running %s", " ".join(cmd))
    try:
        completed = subprocess.run(  # nosec B603 B607
            cmd,
            cwd=repo_path,
            env=child_env,
            check=False,
            capture_output=True,
        )
    except OSError as e:
        raise RunError(f"cargo could not start: {e}", command=cmd) from e

    output = RunOutput(
        stdout=completed.stdout.decode("utf-8", errors="replace"),
        stderr=completed.stderr.decode("utf-8", errors="replace"),
    )
    if completed.returncode != 0:
        tail = output.stderr.strip().splitlines()[-5:]
        details = ": " + " | ".join(tail) if tail else ""
        raise RunError(
            f"cargo run exited with code {completed.returncode}{details}",
            command=cmd,
            returncode=completed.returncode,
            output=output,
        )
    return output
