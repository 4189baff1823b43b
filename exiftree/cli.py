from __future__ import annotations

import logging
import os
from pathlib import Path

import click
import typer
from dotenv import load_dotenv

from exiftree.config import RunConfig
from exiftree.runner import EXIT_ERROR, EXIT_OK, run_sync

app = typer.Typer(add_completion=False, help="Sort JPEG files into folders by their subject tags")


def _configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.getenv("EXIFTREE_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def run(
    target_directory: Path = typer.Argument(..., help="Directory holding the JPEG files to sort"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Report what would happen without touching any file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    load_dotenv()
    _configure_logging(verbose)

    config = RunConfig.from_env(target_directory, dry_run=dry_run)
    code = run_sync(config)
    raise typer.Exit(code=code)


def main() -> None:
    """Console entry point. Bad arguments exit with 1 like any other setup error."""
    try:
        code = app(standalone_mode=False)
    except click.Abort:
        code = EXIT_ERROR
    except click.ClickException as exc:
        exc.show()
        code = EXIT_ERROR
    raise SystemExit(code if isinstance(code, int) else EXIT_OK)


if __name__ == "__main__":
    main()
