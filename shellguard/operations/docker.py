import logging
from typing import Optional, Sequence

from shellguard.common.env_vars import SHELLGUARD_DOCKER_TIMEOUT_SECONDS
from shellguard.core.errors import (
    DockerSubcommandNotAllowedError,
    InvalidArgumentError,
    InvalidContainerNameError,
    InvalidDockerOptionError,
    ShellValidationError,
)
from shellguard.core.models import ProcessResult
from shellguard.core.process import safe_exec
from shellguard.core.validators import validate_docker_name
from shellguard.operations.constants import (
    ALLOWED_DOCKER_SUBCOMMANDS,
    DOCKER_CONTAINER_ACTIONS,
)
from shellguard.utils.sentry_helper import capture_rejected_input


def validate_docker_subcommand(args: Sequence[str]) -> None:
    if isinstance(args, (str, bytes)):
        raise TypeError("args must be a sequence of strings, not a single string")
    subcommand = args[0] if len(args) > 0 else None
    if subcommand not in ALLOWED_DOCKER_SUBCOMMANDS:
        allowed = ", ".join(sorted(ALLOWED_DOCKER_SUBCOMMANDS))
        raise DockerSubcommandNotAllowedError(
            f"Docker subcommand not allowed: {subcommand!r}. Must be one of [{allowed}]"
        )


def _validate_container(container: str) -> None:
    if not validate_docker_name(container):
        raise InvalidContainerNameError(f"Invalid container name: {container!r}")


async def _run_docker(args: list[str], timeout: Optional[float]) -> ProcessResult:
    logging.debug(f"docker {args[0]} passed validation")
    return await safe_exec(
        "docker",
        args,
        timeout=SHELLGUARD_DOCKER_TIMEOUT_SECONDS if timeout is None else timeout,
    )


async def safe_docker_exec(
    args: Sequence[str], *, timeout: Optional[float] = None
) -> ProcessResult:
    """
    Run `docker ARGS...` when ARGS[0] is an allowed subcommand.
    The remaining arguments go to docker verbatim as separate argv entries.
    """
    try:
        validate_docker_subcommand(args)
    except ShellValidationError as e:
        capture_rejected_input("docker", e, {"args": list(args)})
        raise
    return await _run_docker(list(args), timeout)


async def safe_docker_container(
    action: str,
    container: str,
    options: Sequence[str] = (),
    *,
    timeout: Optional[float] = None,
) -> ProcessResult:
    """
    `docker ACTION [OPTIONS...] CONTAINER` for actions that target one container
    (start, stop, restart, rm, logs, inspect, stats). The container name is
    validated because its position is fixed; options must be flags such as
    "--tail=100" or "-f". `stats` always gets --no-stream so it returns one
    sample instead of streaming until the timeout.
    """
    params = {"action": action, "container": container, "options": list(options)}
    try:
        if action not in DOCKER_CONTAINER_ACTIONS:
            raise DockerSubcommandNotAllowedError(
                f"Docker subcommand not allowed for a single container: {action!r}"
            )
        _validate_container(container)
        for option in options:
            if not isinstance(option, str) or not option.startswith("-"):
                raise InvalidDockerOptionError(
                    f"Docker option must be a flag (e.g. --tail=100): {option!r}"
                )
    except ShellValidationError as e:
        capture_rejected_input("docker", e, params)
        raise

    options = list(options)
    if action == "stats" and "--no-stream" not in options:
        options.append("--no-stream")
    return await _run_docker([action, *options, container], timeout)


async def safe_docker_exec_in(
    container: str, command: Sequence[str], *, timeout: Optional[float] = None
) -> ProcessResult:
    """
    `docker exec CONTAINER COMMAND...`. `command` is an argument vector run
    directly inside the container, not a shell string.
    """
    params = {"container": container, "command": list(command)}
    try:
        _validate_container(container)
        if isinstance(command, (str, bytes)) or len(command) == 0:
            raise InvalidArgumentError(
                "docker exec needs the command as a non-empty list of arguments"
            )
    except ShellValidationError as e:
        capture_rejected_input("docker exec", e, params)
        raise

    return await _run_docker(["exec", container, *command], timeout)
