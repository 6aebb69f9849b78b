"""CLI interface for repo2file"""

import logging
from pathlib import Path
from typing import Optional, Tuple

import click

from repo2file.application.concat_service import ConcatService
from repo2file.domain.errors import FilterConflictError, Repo2FileError
from repo2file.domain.models.concat_summary import ConcatSummary
from repo2file.domain.models.filter_request import build_filter_request
from repo2file.infrastructure.config.config_manager import ConfigManager
from repo2file.infrastructure.file_walker import LocalFileWalker
from repo2file.infrastructure.git.repository import RepositoryAcquirer
from repo2file.infrastructure.inclusion_policy import InclusionPolicy

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger().setLevel(level)
    for logger_name in logging.Logger.manager.loggerDict:
        if logger_name.startswith("repo2file"):
            logging.getLogger(logger_name).setLevel(level)


def _die(message: str, verbose: bool = False, exc: Optional[Exception] = None) -> None:
    """Exit with a user-friendly error message"""
    if exc is not None:
        logger.error(message, exc_info=verbose)
    else:
        logger.error(message)
    raise click.ClickException(message)


def split_list(ctx, param, values) -> Tuple[str, ...]:
    """Click callback: flatten repeated comma-separated options, dropping blanks"""
    items = []
    for value in values or ():
        items.extend(part.strip() for part in value.split(","))
    return tuple(item for item in items if item)


def default_output_path(cwd: Optional[Path] = None) -> Path:
    """Output file named after the current working directory, e.g. /work/app/app.txt"""
    cwd = cwd or Path.cwd()
    name = cwd.name or "repo2file"
    return cwd / f"{name}.txt"


def _output_summary(summary: ConcatSummary) -> None:
    click.echo(f"Files found: {summary.files_found}")
    click.echo(f"Files included: {summary.files_included}")
    click.echo(f"Files excluded: {summary.files_excluded}")
    click.echo(f"Output written to: {summary.output_path}")


@click.command()
@click.argument("input_location", metavar="INPUT", type=str)
@click.option(
    "--ignore-files",
    multiple=True,
    callback=split_list,
    help="Files to ignore, separated by commas (glob patterns or file names)",
)
@click.option(
    "--ignore-dirs",
    multiple=True,
    callback=split_list,
    help="Directories to ignore, separated by commas",
)
@click.option(
    "--include-files",
    multiple=True,
    callback=split_list,
    help="Files to include, separated by commas (exclusive with --ignore-files and --ignore-dirs)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: <cwd>/<cwd name>.txt)",
)
@click.option(
    "--config",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to .repo2file.yml config file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose (DEBUG) logging")
def cli(
    input_location: str,
    ignore_files: Tuple[str, ...],
    ignore_dirs: Tuple[str, ...],
    include_files: Tuple[str, ...],
    output: Optional[Path],
    config: Optional[Path],
    verbose: bool,
):
    """Turn a code repository into a single text file.

    INPUT: Local directory or Git URL of the repository
    """
    setup_logging(verbose)

    # Checked before touching the file system
    try:
        request = build_filter_request(ignore_files, ignore_dirs, include_files)
    except FilterConflictError as e:
        raise click.UsageError(str(e))

    try:
        if config is not None and not config.is_file():
            _die(f"Config file not found: {config}")
        config_manager = ConfigManager(config_path=config)

        policy = InclusionPolicy(config_manager.get_default_exclusions(), request)
        walker = LocalFileWalker.from_config(config_manager.get_traversal_config())
        acquirer = RepositoryAcquirer.from_config(config_manager.get_acquisition_config())
        service = ConcatService(
            policy,
            walker=walker,
            encoding=config_manager.get_output_config().encoding,
        )
        output_path = output or default_output_path()

        if acquirer.is_remote(input_location):
            with acquirer.acquire(input_location) as working_copy:
                summary = service.run(working_copy, output_path)
        else:
            summary = service.run(Path(input_location), output_path)

        _output_summary(summary)

    except click.ClickException:
        raise
    except Repo2FileError as e:
        _die(str(e), verbose=verbose, exc=e)
    except Exception as e:
        _die(f"Fatal error: {e}", verbose=verbose, exc=e)


def main():
    """Main entry point"""
    cli()


if __name__ == "__main__":
    main()
