"""Command line entry point for filer using Click."""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .. import __version__
from ..config import ConfigManager, FilerConfig, LoggingSettings
from ..core import Batch, Controller
from ..exceptions import StartupError
from ..storage import LocalFileOperations
from ..tui import TriageApp
from ..utils.listing import discover_files
from ..utils.logging import get_logger, print_error, setup_logging

console = Console()
logger = get_logger(__name__)


def load_config(
    config_path: Optional[Path],
    source: Optional[Path],
    target: Optional[Path],
    pattern: Optional[str],
    log_level: Optional[str],
) -> FilerConfig:
    """Load the config file and apply command line overrides."""
    manager = ConfigManager(config_path)
    config = manager.load(overrides={"source": source, "target": target, "pattern": pattern})

    if log_level:
        config.logging = LoggingSettings(**{**config.logging.model_dump(), "level": log_level})

    return config


def build_controller(config: FilerConfig) -> Controller:
    """
    Discover files and wire the controller for a run.

    Raises:
        StartupError: If the source cannot be read, the target cannot be
            created, or no files are left to triage
    """
    filenames = discover_files(config.source, config.pattern)
    batch = Batch(filenames)
    operations = LocalFileOperations(config.source, config.target)

    logger.info(
        f"Starting triage of {batch.total()} file(s) in {config.source}"
        + (f", keeping into {config.target}" if config.target else "")
    )
    return Controller(batch, operations)


def print_summary(controller: Controller):
    """Print counts of kept, deleted and skipped files."""
    tally = controller.tally
    remaining = controller.batch.total() - controller.batch.done()

    table = Table(title="Triage Summary", show_header=True, header_style="bold cyan")
    table.add_column("Result", style="cyan")
    table.add_column("Files", style="green", justify="right")

    table.add_row("Kept", str(tally.kept))
    table.add_row("Deleted", str(tally.deleted))
    table.add_row("Skipped", str(tally.skipped))
    table.add_row("Remaining", str(remaining))

    console.print()
    console.print(table)


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog='Keys: [K]eep, [D]elete, [S]kip, [Q]uit\n\nExample: filer -s ~/Downloads -p "\\.jpg$" -t ./images',
)
@click.version_option(version=__version__, prog_name="filer")
@click.option(
    "--source",
    "-s",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Source directory (default: current)",
)
@click.option(
    "--target",
    "-t",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Target directory for kept files (default: keep in place)",
)
@click.option(
    "--pattern",
    "-p",
    default=None,
    help="Regular expression pattern to filter files",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Logging level (overrides config)",
)
def cli(
    source: Optional[Path],
    target: Optional[Path],
    pattern: Optional[str],
    config_path: Optional[Path],
    log_level: Optional[str],
):
    """
    filer - Interactive file sorting: keep or delete files one at a time.

    Walks through the files of SOURCE, optionally filtered by a regular
    expression, and asks what to do with each one.
    """
    try:
        config = load_config(config_path, source, target, pattern, log_level)
    except (FileNotFoundError, ValueError) as e:
        print_error(f"Configuration error: {escape(str(e))}")
        sys.exit(1)

    setup_logging(
        level=config.logging.level,
        log_dir=config.logging.log_dir,
        max_bytes=config.logging.max_bytes,
        backup_count=config.logging.backup_count,
        console_enabled=config.logging.console_enabled,
        file_enabled=config.logging.file_enabled,
    )

    try:
        controller = build_controller(config)
    except StartupError as e:
        print_error(f"Error: {escape(str(e))}")
        logger.error(f"Startup failed: {e}")
        sys.exit(1)

    exit_code = TriageApp(controller, console=console).run()

    print_summary(controller)
    sys.exit(exit_code)


if __name__ == "__main__":
    cli()
