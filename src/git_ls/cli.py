"""CLI for git_ls."""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from . import __version__
from .format import REPORT_FORMATS, REPORT_FORMATS_TYPE, format_legend, format_report
from .git_ls import ProbeError
from .scan import DEFAULT_WORKERS, scan_folder

app = typer.Typer(context_settings={"help_option_names": ["-h", "--help"]})


def _version_callback(value: bool) -> None:  # noqa: FBT001
    if value:
        print(f"git-ls {__version__}")
        raise typer.Exit(0)


def _legend_callback(value: bool) -> None:  # noqa: FBT001
    if value:
        print(format_legend())
        raise typer.Exit(0)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(threadName)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )


@app.command()
def git_ls(  # noqa: PLR0913
    directory: Annotated[Path, typer.Argument(help="directory to list")] = Path(),
    *,
    include_hidden: Annotated[
        bool, typer.Option("-a", "--all", help="show entries starting with a dot")
    ] = False,
    long_list: Annotated[
        bool, typer.Option("-l", "--list", help="display results in 1 long list")
    ] = False,
    dirty_only: Annotated[
        bool,
        typer.Option(
            "-d",
            "--dirty",
            help="only show dirty dirs, this is fast because remotes are not checked",
        ),
    ] = False,
    by_state: Annotated[
        bool, typer.Option("-s", "--state-sort", help="sort output by state")
    ] = False,
    fmt: Annotated[
        str, typer.Option("-f", "--format", help="output format")
    ] = "grid",
    jobs: Annotated[
        int, typer.Option("-j", "--jobs", min=1, help="max concurrent git checks")
    ] = DEFAULT_WORKERS,
    timeout: Annotated[
        float | None,
        typer.Option("-t", "--timeout", help="seconds before a git call is killed"),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("-v", "--verbose", help="verbose (debug) output")
    ] = False,
    legend: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--legend",
            callback=_legend_callback,
            is_eager=True,
            help="Print the color of each state",
        ),
    ] = None,
    version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Print version",
        ),
    ] = None,
) -> int:
    """List a directory with the git status of every subdirectory."""
    _configure_logging(verbose=verbose)
    if long_list:
        fmt = "list"
    if fmt not in REPORT_FORMATS:
        raise typer.BadParameter(
            f"must be one of {REPORT_FORMATS}", param_hint="'--format'"
        )
    fmt_report: REPORT_FORMATS_TYPE = fmt  # type: ignore[assignment]
    try:
        entries = scan_folder(
            directory,
            include_hidden=include_hidden,
            dirty_only=dirty_only,
            by_state=by_state,
            workers=jobs,
            timeout=timeout,
        )
    except (FileNotFoundError, NotADirectoryError) as e:
        raise typer.BadParameter(str(e), param_hint="'DIRECTORY'") from e
    except ProbeError as e:
        message = f"Error: {e}"
        if e.__cause__ is not None:
            message += f"\n{e.__cause__}"
        typer.echo(message, err=True)
        raise typer.Exit(1) from e
    report = format_report(entries, fmt=fmt_report)
    if report:
        print(report)
    return 0
