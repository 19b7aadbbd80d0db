import logging
from enum import Enum
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler


class Verbosity(Enum):
    NORMAL = 0
    VERBOSE = 1
    VERY_VERBOSE = 2


def cli_flags_to_verbosity(verbose_flags: Optional[List[bool]]) -> Verbosity:
    if verbose_flags is None or len(verbose_flags) == 0:
        return Verbosity.NORMAL
    elif len(verbose_flags) == 1:
        return Verbosity.VERBOSE
    else:
        return Verbosity.VERY_VERBOSE


def suppress_noisy_logs():
    # sentry's transport logs every envelope at DEBUG
    logging.getLogger("sentry_sdk.errors").setLevel(logging.INFO)
    # asyncio reports slow callbacks and child watcher details at DEBUG
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def init_logging(verbose_flags: Optional[List[bool]] = None) -> Console:
    verbosity = cli_flags_to_verbosity(verbose_flags)

    logging.basicConfig(
        force=True,
        level=logging.DEBUG if verbosity != Verbosity.NORMAL else logging.INFO,
        format="%(message)s",
        handlers=[
            RichHandler(
                show_level=verbosity != Verbosity.NORMAL,
                # log lines carry rendered argv and user input, never rich markup
                markup=False,
                show_time=False,
                show_path=verbosity == Verbosity.VERY_VERBOSE,
                console=Console(width=None, stderr=True),
            )
        ],
    )
    if verbosity != Verbosity.VERY_VERBOSE:
        suppress_noisy_logs()

    logging.debug(f"verbosity is {verbosity}")

    return Console()
