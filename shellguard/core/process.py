import asyncio
import logging
from typing import Mapping, Optional, Sequence

from shellguard.common.env_vars import (
    SHELLGUARD_EXEC_TIMEOUT_SECONDS,
    SHELLGUARD_KILL_GRACE_SECONDS,
)
from shellguard.core.errors import (
    CommandTimeoutError,
    InvalidArgumentError,
    SpawnError,
)
from shellguard.core.models import ProcessResult
from shellguard.core.sanitize import render_argv


def build_argv(command: str, args: Sequence[str]) -> list[str]:
    if not isinstance(command, str):
        raise TypeError(f"command must be a string, got {type(command).__name__}")
    if not command:
        raise InvalidArgumentError("Command must not be empty")
    if isinstance(args, (str, bytes)):
        raise TypeError("args must be a sequence of strings, not a single string")

    argv = [command]
    for arg in args:
        if not isinstance(arg, str):
            raise TypeError(
                f"Every argument must be a string, got {type(arg).__name__}"
            )
        argv.append(arg)

    for arg in argv:
        if "\0" in arg:
            raise InvalidArgumentError(f"Argument contains a NUL byte: {arg!r}")
    return argv


async def _terminate(process: asyncio.subprocess.Process, grace: float) -> None:
    """Stop a running child and reap it. SIGTERM first when grace > 0, SIGKILL otherwise or after grace."""
    try:
        if grace > 0:
            process.terminate()
            try:
                await asyncio.wait_for(process.wait(), timeout=grace)
                return
            except asyncio.TimeoutError:
                logging.debug(f"pid {process.pid} ignored SIGTERM, sending SIGKILL")
        process.kill()
    except ProcessLookupError:
        # exited between the returncode check and the signal
        pass
    await process.wait()


def _decode(data: Optional[bytes]) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


async def safe_exec(
    command: str,
    args: Sequence[str],
    *,
    timeout: Optional[float] = None,
    env: Optional[Mapping[str, str]] = None,
    cwd: Optional[str] = None,
) -> ProcessResult:
    """
    Run `command` with `args` as its argument vector and capture its output.

    No shell sits between the caller and the program, so characters such as
    ; | $ ` are plain data to the target. A non-zero exit code is returned in
    the result. SpawnError is raised when the program cannot be started and
    CommandTimeoutError when it overruns `timeout` seconds; in both cases and
    on cancellation the child is killed and reaped before the exception leaves.
    `env`, when given, replaces the child's whole environment.
    """
    argv = build_argv(command, args)
    invocation = render_argv(argv)
    timeout = SHELLGUARD_EXEC_TIMEOUT_SECONDS if timeout is None else timeout

    logging.debug(f"Running {invocation} (timeout={timeout}s)")
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=dict(env) if env is not None else None,
            cwd=cwd,
        )
    except OSError as e:
        raise SpawnError(
            f"Failed to start {command}: {e.strerror or e}", command=command
        ) from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        logging.warning(f"Command timed out after {timeout}s: {invocation}")
        await _terminate(process, grace=SHELLGUARD_KILL_GRACE_SECONDS)
        raise CommandTimeoutError(
            f"Command timed out after {timeout}s: {command}",
            command=command,
            timeout=timeout,
        ) from None
    finally:
        # cancellation or any other interruption: never leave the child behind
        if process.returncode is None:
            await _terminate(process, grace=0)

    exit_code = process.returncode
    logging.debug(f"{command} exited with code {exit_code}")
    return ProcessResult(
        stdout=_decode(stdout),
        stderr=_decode(stderr),
        exit_code=exit_code,
        invocation=invocation,
    )
