import logging
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

from .errors import FpsBenchError

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    from .config import LOG_LEVEL

    level = logging.DEBUG if verbose else getattr(logging, LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        stream=sys.stderr,
    )


@click.command()
@click.option(
    "--config",
    "config_path",
    default=None,
    help="Benchmark definition file, TOML or YAML (default: FPSBENCH_CONFIG or fpsbench.toml)",
)
@click.option(
    "--dir",
    "repo_dir",
    required=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Git working tree of the project to benchmark",
)
@click.option(
    "--output",
    "-o",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write the markdown report to this file",
)
@click.option(
    "--json",
    "json_path",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Save raw fps results as JSON",
)
@click.option(
    "--echo/--no-echo",
    default=None,
    help="Echo build/run output (default: FPSBENCH_ECHO_OUTPUT or on)",
)
@click.option(
    "--progress/--no-progress",
    default=True,
    show_default=True,
    help="Print per-run progress to stderr",
)
@click.option("--dry-run", is_flag=True, help="Print planned runs without executing")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(
    config_path: str | None,
    repo_dir: Path,
    output: Path | None,
    json_path: Path | None,
    echo: bool | None,
    progress: bool,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Benchmark examples across git commits and print a markdown fps comparison."""
    load_dotenv()
    _configure_logging(verbose)

    # Settings are read at import time, after .env is loaded
    from .config import DEFAULT_CONFIG_PATH, ECHO_OUTPUT, load_config
    from .report import build_table, render_markdown
    from .runner.executor import BenchmarkRunner

    resolved_config = Path(config_path or DEFAULT_CONFIG_PATH).expanduser().resolve()
    try:
        config = load_config(resolved_config)
    except FpsBenchError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    logger.info(
        "Loaded %s: %d benches x %d commits",
        resolved_config,
        len(config.benchmarks),
        len(config.revisions),
    )

    runner = BenchmarkRunner(
        config,
        repo_dir.resolve(),
        echo_output=ECHO_OUTPUT if echo is None else echo,
        progress=progress,
    )

    if dry_run:
        planned = runner.plan()
        click.echo(f"Config: {resolved_config}")
        click.echo(f"Planned runs: {len(planned)} (frames={config.frames})")
        for rev, bench in planned:
            click.echo(f"- {bench.display_label} @ {rev.display_label} ({rev.commit})")
        return

    try:
        results = runner.run()
        table = build_table(config.revisions, config.benchmarks, results, title=config.title)
    except FpsBenchError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    # Print first so a bad output path never loses the report
    content = render_markdown(table)
    if content:
        click.echo(content)

    failed = False
    if json_path is not None:
        try:
            results.save(json_path)
            click.echo(f"Results saved to: {json_path}", err=True)
        except OSError as e:
            click.echo(f"Error: Failed to save results to {json_path}: {e}", err=True)
            failed = True

    if output is not None:
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(content + "\n" if content else "", encoding="utf-8")
            click.echo(f"Report saved to: {output}", err=True)
        except OSError as e:
            click.echo(f"Error: Failed to save report to {output}: {e}", err=True)
            failed = True

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
