import logging
import os
from typing import Iterable, Optional

from shellguard.common.env_vars import SHELLGUARD_PG_DUMP_TIMEOUT_SECONDS
from shellguard.core.errors import (
    InvalidDumpOptionsError,
    InvalidHostnameError,
    InvalidOutputPathError,
    InvalidPostgresDatabaseNameError,
    InvalidPostgresUsernameError,
    InvalidTableNameError,
    ShellValidationError,
)
from shellguard.core.models import ProcessResult
from shellguard.core.process import safe_exec
from shellguard.core.validators import (
    is_under_root,
    normalize_path,
    validate_hostname,
    validate_path,
    validate_pg_identifier,
)
from shellguard.operations.constants import BACKUP_OUTPUT_ROOTS
from shellguard.utils.sentry_helper import capture_rejected_input


def _check_output_roots(output_roots: Iterable[str]) -> tuple[str, ...]:
    roots = (output_roots,) if isinstance(output_roots, str) else tuple(output_roots)
    if not roots:
        raise InvalidOutputPathError("Invalid output file path: no output roots given")
    for root in roots:
        normalized = normalize_path(root)
        if normalized is None or not any(
            is_under_root(normalized, allowed) for allowed in BACKUP_OUTPUT_ROOTS
        ):
            raise InvalidOutputPathError(
                f"Invalid output file path: root {root!r} is outside the backup directories"
            )
    return roots


def build_pg_dump_args(
    *,
    host: str,
    user: str,
    database: str,
    output_file: str,
    tables: Optional[list[str]] = None,
    schema_only: bool = False,
    data_only: bool = False,
    output_roots: Iterable[str] = BACKUP_OUTPUT_ROOTS,
) -> list[str]:
    """Validate every pg_dump input and return the argument vector (without the program name)."""
    if not validate_hostname(host):
        raise InvalidHostnameError(f"Invalid hostname: {host!r}")

    if not validate_pg_identifier(user):
        raise InvalidPostgresUsernameError(f"Invalid PostgreSQL username: {user!r}")

    if not validate_pg_identifier(database):
        raise InvalidPostgresDatabaseNameError(
            f"Invalid PostgreSQL database name: {database!r}"
        )

    roots = _check_output_roots(output_roots)
    if not validate_path(output_file, roots):
        raise InvalidOutputPathError(f"Invalid output file path: {output_file!r}")

    if isinstance(tables, str):
        raise InvalidTableNameError(f"Invalid table name: expected a list, got {tables!r}")
    for table in tables or []:
        if not validate_pg_identifier(table):
            raise InvalidTableNameError(f"Invalid table name: {table!r}")

    if schema_only and data_only:
        raise InvalidDumpOptionsError(
            "schema_only and data_only cannot be used together"
        )

    args = ["-h", host, "-U", user, "-f", output_file]
    if schema_only:
        args.append("--schema-only")
    if data_only:
        args.append("--data-only")
    for table in tables or []:
        args.extend(["-t", table])

    # database goes last, as the only positional argument
    args.append(database)
    return args


async def safe_pg_dump(
    *,
    host: str,
    user: str,
    database: str,
    password: str,
    output_file: str,
    tables: Optional[list[str]] = None,
    schema_only: bool = False,
    data_only: bool = False,
    output_roots: Iterable[str] = BACKUP_OUTPUT_ROOTS,
    timeout: Optional[float] = None,
) -> ProcessResult:
    """
    Dump a PostgreSQL database to `output_file` with pg_dump.

    The password reaches pg_dump through PGPASSWORD in the child environment,
    so it never appears in argv (and therefore not in `ps` output or logs).
    `output_roots` can narrow the default backup directories but not widen them.
    """
    try:
        args = build_pg_dump_args(
            host=host,
            user=user,
            database=database,
            output_file=output_file,
            tables=tables,
            schema_only=schema_only,
            data_only=data_only,
            output_roots=output_roots,
        )
    except ShellValidationError as e:
        capture_rejected_input(
            "pg_dump",
            e,
            {
                "host": host,
                "user": user,
                "database": database,
                "output_file": output_file,
                "tables": tables,
            },
        )
        raise

    if not isinstance(password, str):
        raise TypeError("password must be a string")

    env = os.environ.copy()
    env["PGPASSWORD"] = password

    logging.info(f"Dumping database {database} on {host} to {output_file}")
    return await safe_exec(
        "pg_dump",
        args,
        env=env,
        timeout=SHELLGUARD_PG_DUMP_TIMEOUT_SECONDS if timeout is None else timeout,
    )
