import asyncio
import json
import logging
from typing import Awaitable, List, Optional, TypeVar

import typer
from rich.console import Console

from shellguard import get_version
from shellguard.core.errors import ProcessError, ShellValidationError
from shellguard.core.models import DiskUsage, ProcessResult
from shellguard.operations import (
    safe_df,
    safe_docker_exec,
    safe_du,
    safe_pg_dump,
    safe_tar,
)
from shellguard.utils.console.logging import init_logging
from shellguard.utils.sentry_helper import init_sentry

T = TypeVar("T")

# exit code for input refused before anything ran; matches click's usage errors
VALIDATION_EXIT_CODE = 2
PROCESS_FAILURE_EXIT_CODE = 1

app = typer.Typer(
    add_completion=False,
    pretty_exceptions_show_locals=False,
    no_args_is_help=True,
    help="Run administrative shell-outs (pg_dump, docker, tar, du, df) with validated arguments",
)

# Common cli options
opt_verbose: Optional[List[bool]] = typer.Option(
    [],
    "--verbose",
    "-v",
    help="Verbose output. You can pass multiple times to increase the verbosity. e.g. -v or -vv",
)
opt_json: bool = typer.Option(
    False,
    "--json",
    help="Print the result as JSON instead of plain text",
)
opt_timeout: Optional[float] = typer.Option(
    None,
    "--timeout",
    help="Timeout in seconds. Defaults to the per-command SHELLGUARD_*_TIMEOUT_SECONDS setting",
)


def _run(operation: Awaitable[T]) -> T:
    err_console = Console(stderr=True)
    try:
        return asyncio.run(operation)  # type: ignore
    except ShellValidationError as e:
        err_console.print(f"Error: {e}", markup=False, highlight=False)
        raise typer.Exit(code=VALIDATION_EXIT_CODE)
    except ProcessError as e:
        err_console.print(f"Error: {e}", markup=False, highlight=False)
        raise typer.Exit(code=PROCESS_FAILURE_EXIT_CODE)


def _print_process_result(result: ProcessResult, json_output: bool) -> None:
    if json_output:
        typer.echo(result.model_dump_json(indent=2))
    else:
        if result.stdout:
            typer.echo(result.stdout, nl=not result.stdout.endswith("\n"))
        if result.stderr:
            typer.echo(result.stderr, nl=not result.stderr.endswith("\n"), err=True)
    raise typer.Exit(code=_shell_exit_code(result.exit_code))


def _shell_exit_code(exit_code: int) -> int:
    # a child killed by signal N reports -N; shells report 128 + N
    if exit_code < 0:
        return 128 - exit_code
    return exit_code


@app.callback()
def main(verbose: Optional[List[bool]] = opt_verbose):
    init_logging(verbose)  # type: ignore
    if init_sentry():
        logging.debug("sentry reporting enabled")


@app.command()
def du(
    path: str = typer.Argument(..., help="Absolute path to measure"),
    summarize: bool = typer.Option(
        True, "--summarize/--no-summarize", help="Only report the total for PATH"
    ),
    json_output: bool = opt_json,
    timeout: Optional[float] = opt_timeout,
):
    """Disk usage of PATH in bytes (0 when PATH does not exist)"""
    size = _run(safe_du(path, summarize=summarize, timeout=timeout))
    if json_output:
        typer.echo(json.dumps({"path": path, "bytes": size}))
    else:
        typer.echo(str(size))


@app.command()
def df(
    path: str = typer.Argument("/", help="Absolute path on the filesystem to inspect"),
    json_output: bool = opt_json,
    timeout: Optional[float] = opt_timeout,
):
    """Size, usage and free space of the filesystem holding PATH"""
    usage: DiskUsage = _run(safe_df(path, timeout=timeout))
    if json_output:
        typer.echo(usage.model_dump_json(indent=2))
    else:
        typer.echo(
            f"total={usage.total} used={usage.used} free={usage.free} percentage={usage.percentage}"
        )


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        # everything from the subcommand on belongs to docker, e.g. stop --timeout 10
        "allow_interspersed_args": False,
    }
)
def docker(
    args: List[str] = typer.Argument(
        ..., help="docker subcommand and its arguments, e.g. ps -a"
    ),
    json_output: bool = opt_json,
    timeout: Optional[float] = opt_timeout,
):
    """
    Run an allowed docker subcommand.

    --json and --timeout must come before the subcommand; anything after it is
    passed to docker unchanged.
    """
    result = _run(safe_docker_exec(args, timeout=timeout))
    _print_process_result(result, json_output)


@app.command("pg-dump")
def pg_dump(
    host: str = typer.Option(..., "--host", help="Database server hostname"),
    user: str = typer.Option(..., "--user", help="PostgreSQL role"),
    database: str = typer.Option(..., "--database", help="Database to dump"),
    output_file: str = typer.Option(
        ..., "--output-file", help="Absolute path under /var/backups or /tmp"
    ),
    password: str = typer.Option(
        ...,
        "--password",
        envvar="PGPASSWORD",
        prompt=True,
        hide_input=True,
        help="Database password (read from PGPASSWORD when set)",
    ),
    tables: Optional[List[str]] = typer.Option(
        None, "--table", "-t", help="Only dump this table (can specify -t multiple times)"
    ),
    schema_only: bool = typer.Option(False, "--schema-only"),
    data_only: bool = typer.Option(False, "--data-only"),
    json_output: bool = opt_json,
    timeout: Optional[float] = opt_timeout,
):
    """Dump a PostgreSQL database with pg_dump"""
    result = _run(
        safe_pg_dump(
            host=host,
            user=user,
            database=database,
            password=password,
            output_file=output_file,
            tables=tables or None,
            schema_only=schema_only,
            data_only=data_only,
            timeout=timeout,
        )
    )
    _print_process_result(result, json_output)


@app.command()
def tar(
    mode: str = typer.Argument(..., help="'c' to create an archive, 'x' to extract one"),
    archive_path: str = typer.Argument(..., help="Archive under /var/backups or /tmp"),
    source_path: str = typer.Argument(
        ..., help="Directory to archive, or to extract into"
    ),
    gzip: bool = typer.Option(False, "--gzip", "-z", help="Compress with gzip"),
    excludes: Optional[List[str]] = typer.Option(
        None, "--exclude", help="Glob pattern to leave out (can specify multiple times)"
    ),
    json_output: bool = opt_json,
    timeout: Optional[float] = opt_timeout,
):
    """Create or extract a tar archive"""
    result = _run(
        safe_tar(
            mode,
            archive_path,
            source_path,
            gzip=gzip,
            excludes=excludes or None,
            timeout=timeout,
        )
    )
    _print_process_result(result, json_output)


@app.command()
def version() -> None:
    typer.echo(get_version())


def run():
    app()


if __name__ == "__main__":
    run()
