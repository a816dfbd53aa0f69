"""Command-line entry point for the task manager."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from taskmanager.config import AppConfig
from taskmanager.console import ConsoleUI
from taskmanager.server import configure, run
from taskmanager.storage import DEFAULT_DATA_FILE
from taskmanager.store import TaskStore

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the task manager.

    Records go to stderr so they never mix with the shell's output or the MCP
    stdio stream.

    Args:
        verbose: Enable debug level logging
    """
    log_level = logging.DEBUG if verbose else logging.WARNING

    logging.basicConfig(
        level=log_level,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _ensure_data_dir(data_file: Path) -> None:
    """Create the data file's directory; failing here is the one fatal startup error."""
    try:
        data_file.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise click.ClickException(f"Cannot create data directory {data_file.parent}: {e.strerror or e}") from e


@click.group(invoke_without_command=True)
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_DATA_FILE,
    show_default=True,
    help="JSON file holding the task list",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, data_file: Path, verbose: bool) -> None:
    """Manage a task list from an interactive prompt."""
    setup_logging(verbose)
    config = AppConfig(data_file=data_file, verbose=verbose)
    _ensure_data_dir(config.data_file)
    ctx.obj = config
    if ctx.invoked_subcommand is None:
        ctx.invoke(shell)


@main.command()
@click.pass_obj
def shell(config: AppConfig) -> None:
    """Run the interactive task prompt (default)."""
    ui = ConsoleUI(TaskStore(), config)
    ui.load()
    ctx = click.get_current_context()
    ctx.exit(ui.run())


@main.command()
@click.pass_obj
def serve(config: AppConfig) -> None:
    """Expose the task list as MCP tools over stdio."""
    configure(config.data_file)
    logger.info("Serving tasks from %s", config.data_file)
    run()
