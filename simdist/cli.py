"""Command-line interface for simdist."""

import logging
from pathlib import Path

import click
from rich.console import Console

from .config import Config, load_config
from .core.loader import load_records
from .core.pipeline import run
from .core.reporting import ConsoleWriter, detect_terminal_width
from .errors import SimilarityError
from .utils.logging_setup import log_operation, setup_logging

logger = logging.getLogger(__name__)


def configure_logging(config: Config) -> logging.Logger:
    """Configure the package logger from the ``logging`` config section."""
    log_dir = config.get("logging.log_dir")
    return setup_logging(
        name="simdist",
        level=config.get("logging.level", "WARNING"),
        log_dir=Path(log_dir) if log_dir else None,
        file=bool(config.get("logging.file", False)),
        json_format=bool(config.get("logging.json", False))
    )


def analyze(path: Path, display: bool, stdout: Console, stderr: Console) -> None:
    """Load records, compute similarities and write the report."""
    config = load_config(path)
    configure_logging(config)
    log_operation(logger, "analyze", path=str(path), display=display)

    records = load_records(path)

    results = run(
        records,
        precision=config.get("analysis.precision"),
        workers=config.get("analysis.workers"),
        show_progress=bool(config.get("output.show_progress")) and stderr.is_terminal,
        console=stderr
    )

    width = config.get("display.width") or detect_terminal_width(
        stdout, fallback=config.get("display.fallback_width")
    )

    writer = ConsoleWriter(stdout)
    writer.write_results(
        results,
        display,
        width=width,
        fill_char=config.get("display.fill_char"),
        height_ratio=config.get("display.height_ratio")
    )
    logger.info(f"Analysis complete: {results.count} similarities, mean {results.mean}")


@click.command(name="simdist")
@click.option(
    "-p",
    "--path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="The path to the CSV file to read (columns: uid, content)"
)
@click.option(
    "--display",
    is_flag=True,
    default=False,
    help="Display the similarities distribution instead of raw scores"
)
def cli(path: Path, display: bool):
    """Calculate similarities between texts with the Jaccard index."""
    stdout = Console(highlight=False)
    stderr = Console(stderr=True, highlight=False)
    try:
        analyze(path, display, stdout, stderr)
    except SimilarityError as e:
        logger.debug(f"{type(e).__name__}: {e.message}", extra={'extra_fields': e.details})
        raise click.ClickException(e.message) from e


def main():
    """Main CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
