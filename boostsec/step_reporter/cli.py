"""CLI entry point for the step reporter."""

import logging
import sys
from pathlib import Path

import typer

from boostsec.step_reporter.config import load_config
from boostsec.step_reporter.replay import load_event_log, replay
from boostsec.step_reporter.reporter import StepReporter

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
    force=True,
)
logger = logging.getLogger(__name__)

app = typer.Typer(help="Render test runner events as an indented step report.")


@app.callback()
def main() -> None:
    """Step reporter commands."""


@app.command("replay")
def replay_command(
    path: Path = typer.Argument(  # noqa: B008
        ..., help="Recorded event log (YAML or JSON)"
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None, "--config", "-c", help="Reporter configuration YAML"
    ),
    color: bool | None = typer.Option(
        None, "--color/--no-color", help="Force colors on or off"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Replay a recorded event log through the step reporter."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        reporter_config = load_config(config)
        log = load_event_log(path)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Failed to load input: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if color is not None:
        reporter_config.use_color = color
    logger.debug(f"Replaying {len(log.events)} events from {path}")

    reporter = StepReporter(
        theme=reporter_config.build_theme(),
        write=lambda line: typer.echo(line, color=color),
    )
    try:
        result = replay(log, reporter, default_slow=reporter_config.slow)
    except ValueError as e:
        logger.error(f"Replay failed: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    logger.info(
        f"Replay finished: {result.passed} passed, {result.failed} failed, "
        f"{result.retried} retried, {result.skipped} skipped"
    )
    if result.failed:
        raise typer.Exit(code=1)


if __name__ == "__main__":  # pragma: no cover
    app()
