import logging
import re
from typing import Optional

from shellguard.common.env_vars import (
    SHELLGUARD_DF_TIMEOUT_SECONDS,
    SHELLGUARD_DU_TIMEOUT_SECONDS,
)
from shellguard.core.errors import InvalidPathForDfError, InvalidPathForDuError
from shellguard.core.models import DiskUsage
from shellguard.core.process import safe_exec
from shellguard.core.validators import validate_path
from shellguard.utils.sentry_helper import capture_rejected_input

# One data line of `df -P`: filesystem, size, used, available, capacity%, mount point.
# Filesystem and mount point may contain spaces, so anchor on the numeric columns.
DF_LINE_PATTERN = re.compile(
    r"^(?P<filesystem>.+?)\s+(?P<total>\d+)\s+(?P<used>\d+)\s+(?P<free>\d+)\s+(?P<capacity>\d+|-)%?\s+(?P<mount>.+)$"
)


def parse_du_output(stdout: str) -> int:
    """Bytes reported on the last line of du output (the grand total), or 0."""
    lines = [line for line in stdout.splitlines() if line.strip()]
    if not lines:
        return 0
    size = lines[-1].split(None, 1)[0]
    try:
        return max(int(size), 0)
    except ValueError:
        return 0


def parse_df_output(stdout: str) -> DiskUsage:
    for line in stdout.splitlines()[1:]:
        match = DF_LINE_PATTERN.match(line.strip())
        if not match:
            continue
        total = int(match.group("total"))
        used = int(match.group("used"))
        free = int(match.group("free"))
        percentage = round(used / total * 100, 2) if total > 0 else 0.0
        return DiskUsage(
            total=total,
            used=used,
            free=free,
            percentage=min(max(percentage, 0.0), 100.0),
        )
    return DiskUsage()


async def safe_du(
    path: str, *, summarize: bool = True, timeout: Optional[float] = None
) -> int:
    """
    Disk usage of `path` in bytes. A path that does not exist is not an error and
    yields 0; a path that fails validation raises InvalidPathForDuError.
    """
    if not validate_path(path):
        error = InvalidPathForDuError(f"Invalid path for du: {path!r}")
        capture_rejected_input("du", error, {"path": path})
        raise error

    args = ["-s", "-b"] if summarize else ["-b"]
    args.extend(["--", path])

    result = await safe_exec(
        "du",
        args,
        timeout=SHELLGUARD_DU_TIMEOUT_SECONDS if timeout is None else timeout,
    )
    if not result.ok:
        # du still prints the total when only some subdirectories were unreadable
        logging.debug(f"du exited with {result.exit_code} for {path}: {result.stderr.strip()}")
    return parse_du_output(result.stdout)


async def safe_df(path: str = "/", *, timeout: Optional[float] = None) -> DiskUsage:
    """Size, usage and free space of the filesystem holding `path`. Zeros when df reports nothing usable."""
    if not validate_path(path):
        error = InvalidPathForDfError(f"Invalid path for df: {path!r}")
        capture_rejected_input("df", error, {"path": path})
        raise error

    result = await safe_exec(
        "df",
        ["-P", "-B1", "--", path],
        timeout=SHELLGUARD_DF_TIMEOUT_SECONDS if timeout is None else timeout,
    )
    if not result.ok:
        logging.debug(f"df exited with {result.exit_code} for {path}: {result.stderr.strip()}")
        return DiskUsage()
    return parse_df_output(result.stdout)
