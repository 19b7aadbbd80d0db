import logging
import re
from typing import Optional, Sequence

from shellguard.common.env_vars import SHELLGUARD_TAR_TIMEOUT_SECONDS
from shellguard.core.errors import (
    InvalidArchivePathError,
    InvalidExcludePatternError,
    InvalidSourcePathError,
    InvalidTarModeError,
    ShellValidationError,
)
from shellguard.core.models import ProcessResult
from shellguard.core.process import safe_exec
from shellguard.core.validators import validate_path
from shellguard.operations.constants import (
    TAR_ARCHIVE_ROOTS,
    TAR_MODES,
    TAR_SOURCE_ROOTS,
)
from shellguard.utils.sentry_helper import capture_rejected_input

# Glob patterns such as "node_modules", "*.log" or "cache/*"
EXCLUDE_PATTERN = re.compile(r"^[A-Za-z0-9._*?/-]+$")


def build_tar_args(
    mode: str,
    archive_path: str,
    source_path: str,
    *,
    gzip: bool = False,
    excludes: Optional[Sequence[str]] = None,
) -> list[str]:
    if mode not in TAR_MODES:
        raise InvalidTarModeError(f"Invalid tar mode: {mode!r}. Must be 'c' or 'x'")

    if not validate_path(archive_path, TAR_ARCHIVE_ROOTS):
        raise InvalidArchivePathError(f"Invalid archive path: {archive_path!r}")

    if not validate_path(source_path, TAR_SOURCE_ROOTS):
        raise InvalidSourcePathError(f"Invalid source path: {source_path!r}")

    if isinstance(excludes, str):
        excludes = [excludes]
    for exclude in excludes or []:
        if (
            not isinstance(exclude, str)
            or exclude.startswith("-")
            or not EXCLUDE_PATTERN.fullmatch(exclude)
        ):
            raise InvalidExcludePatternError(f"Invalid exclude pattern: {exclude!r}")

    args = ["-" + mode]
    if gzip:
        args.append("-z")
    args.extend(["-f", archive_path])
    # GNU tar applies --exclude only to members named after it
    args.extend(f"--exclude={exclude}" for exclude in excludes or [])
    args.extend(["-C", source_path])
    if mode == "c":
        args.append(".")
    return args


async def safe_tar(
    mode: str,
    archive_path: str,
    source_path: str,
    *,
    gzip: bool = False,
    excludes: Optional[Sequence[str]] = None,
    timeout: Optional[float] = None,
) -> ProcessResult:
    """
    Create ("c") an archive of the contents of `source_path`, or extract ("x")
    an archive into `source_path`. Archives live under the backup roots;
    sources and extraction targets under the project roots.
    """
    try:
        args = build_tar_args(
            mode, archive_path, source_path, gzip=gzip, excludes=excludes
        )
    except ShellValidationError as e:
        capture_rejected_input(
            "tar",
            e,
            {
                "mode": mode,
                "archive_path": archive_path,
                "source_path": source_path,
                "excludes": excludes,
            },
        )
        raise

    action = "Creating" if mode == "c" else "Extracting"
    logging.info(f"{action} archive {archive_path} ({source_path})")
    return await safe_exec(
        "tar",
        args,
        timeout=SHELLGUARD_TAR_TIMEOUT_SECONDS if timeout is None else timeout,
    )
