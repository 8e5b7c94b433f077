import logging
import time
from pathlib import Path

import click

from ..config import CI_CONFIG_ENV_VAR, BenchConfig, Benchmark, Revision
from ..errors import CommandError, MetricError, RunError
from ..metrics import extract_fps
from .cargo import RunOutput, refresh_lockfile, run_example, write_ci_config
from .git import apply_patch, checkout_revision
from .results import ResultStore

logger = logging.getLogger(__name__)


def _format_elapsed(elapsed_seconds: float) -> str:
    mins, secs = divmod(int(elapsed_seconds), 60)
    return f"{mins:02d}:{secs:02d}"


class BenchmarkRunner:
    """Run every configured bench at every configured commit, one at a time.

    Builds share a single working tree, so the loop is strictly sequential and
    the first failure aborts the whole run.
    """

    def __init__(
        self,
        config: BenchConfig,
        repo_path: Path,
        *,
        echo_output: bool = True,
        progress: bool = True,
    ):
        self.config = config
        self.repo_path = repo_path
        self.echo_output = echo_output
        self.progress = progress

    def plan(self) -> list[tuple[Revision, Benchmark]]:
        return [(rev, bench) for rev in self.config.revisions for bench in self.config.benchmarks]

    def _prepare_revision(self, revision: Revision) -> None:
        target = f"commit \"{revision.commit}\""
        try:
            checkout_revision(revision, self.repo_path)
            refresh_lockfile(self.repo_path)
        except CommandError as e:
            raise e.annotate(operation="checkout", target=target)

        for patch in self.config.patches:
            try:
                apply_patch(patch, self.repo_path)
            except CommandError as e:
                raise e.annotate(operation=f"patch {patch.name}", target=target)

    def _echo(self, output: RunOutput) -> None:
        click.echo(output.stdout, nl=False)
        click.echo(output.stderr, nl=False, err=True)

    def _measure(self, benchmark: Benchmark, revision: Revision, env: dict[str, str]) -> float:
        target = f"{benchmark.display_label} @ {revision.display_label}"
        try:
            output = run_example(
                benchmark,
                self.repo_path,
                features=self.config.features,
                env=env,
            )
        except RunError as e:
            if self.echo_output and e.output is not None:
                self._echo(e.output)
            raise e.annotate(operation="run", target=target)

        if self.echo_output:
            self._echo(output)

        try:
            return extract_fps(output.stderr)
        except MetricError as e:
            raise e.annotate(operation="fps extraction", target=target)

    def run(self) -> ResultStore:
        self.config.validate()

        ci_config_path = write_ci_config(self.repo_path, self.config.frames)
        env = {CI_CONFIG_ENV_VAR: str(ci_config_path)}
        logger.info("Wrote CI config %s (frames=%d)", ci_config_path, self.config.frames)

        store = ResultStore(self.config.benchmarks, self.config.revisions)
        total_runs = len(self.config.revisions) * len(self.config.benchmarks)
        run_index = 0
        wall_start = time.perf_counter()

        for revision in self.config.revisions:
            logger.info("Checking out %s (%s)", revision.commit, revision.display_label)
            self._prepare_revision(revision)

            for benchmark in self.config.benchmarks:
                run_index += 1
                if self.progress:
                    click.echo(
                        f"[Run {run_index}/{total_runs}] "
                        f"{benchmark.display_label} @ {revision.display_label}",
                        err=True,
                    )
                fps = self._measure(benchmark, revision, env)
                logger.info(
                    "%s @ %s: %.2f fps", benchmark.display_label, revision.display_label, fps
                )
                store.record(benchmark, revision, fps)

        if self.progress:
            elapsed = _format_elapsed(time.perf_counter() - wall_start)
            click.echo(f"Completed {total_runs} runs in {elapsed}", err=True)
        return store
