"""Command-line interface for jdex-garden."""

from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from jdex_garden import __version__
from jdex_garden.config import CONFIG_ENV_VAR, GardenConfig, load_config
from jdex_garden.core.materialize.executor import execute_plan
from jdex_garden.core.materialize.planner import build_plans
from jdex_garden.core.render.templates import TemplateRenderer
from jdex_garden.errors import JdexError, PlanExecutionError
from jdex_garden.filesystem import LocalFileSystem
from jdex_garden.logging_config import configure_logging
from jdex_garden.models.plan import Action, Plan
from jdex_garden.protocols import FileSystemProtocol, RendererProtocol

app = typer.Typer(help="Manage a Johnny-Decimal system of markdown notes and directories.")


def run_garden(
    config: GardenConfig,
    fs: FileSystemProtocol,
    renderer: RendererProtocol | None = None,
    *,
    dry_run: bool = False,
) -> list[Plan]:
    """Plan every configured root and, unless dry_run, apply the plans.

    Args:
        config: Parsed configuration.
        fs: Filesystem to inspect and, outside dry-run, to modify.
        renderer: Template renderer. Built from config.templates if omitted.
        dry_run: If True, only compute the plans.

    Returns:
        The plans, identical whether or not they were applied.

    Raises:
        PlanExecutionError: When applying a plan fails. Its ``completed`` and
            ``pending`` actions cover every plan of the run, not only the one
            that failed.
    """
    if renderer is None:
        renderer = TemplateRenderer(config.templates)
    plans = build_plans(config, fs, renderer)
    if dry_run:
        return plans

    done: list[Action] = []
    for index, plan in enumerate(plans):
        try:
            report = execute_plan(plan, fs)
        except PlanExecutionError as e:
            e.completed = (*done, *e.completed)
            e.pending = (*e.pending, *(a for later in plans[index + 1 :] for a in later.actions))
            raise
        done.extend(report.completed)
    return plans


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"jdex {__version__}")
        raise typer.Exit()


@app.command()
def main(
    config_file: Annotated[
        Path,
        typer.Option(
            "--config-file",
            "-c",
            envvar=CONFIG_ENV_VAR,
            help="TOML file that defines the system",
        ),
    ],
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Preview what actions will be taken"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version"),
    ] = None,
) -> None:
    """Create the folders and notes described by the config file."""
    configure_logging(verbose=verbose, quiet=quiet)

    try:
        config = load_config(config_file)
        plans = run_garden(config, LocalFileSystem(), dry_run=dry_run)
    except PlanExecutionError as e:
        logger.error("{}", e)
        logger.error(
            "Stopped after {} action(s); {} not applied",
            len(e.completed),
            len(e.pending),
        )
        raise typer.Exit(1) from e
    except JdexError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e

    if dry_run:
        for plan in plans:
            typer.echo(plan.render())
