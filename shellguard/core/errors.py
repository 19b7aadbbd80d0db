class ShellGuardError(Exception):
    """Base class for every error raised by shellguard."""


class ShellValidationError(ShellGuardError, ValueError):
    """
    An input was refused before any process was spawned.

    The message names the rejected context and is safe to show to API clients.
    """


class InvalidHostnameError(ShellValidationError):
    pass


class InvalidPostgresUsernameError(ShellValidationError):
    pass


class InvalidPostgresDatabaseNameError(ShellValidationError):
    pass


class InvalidTableNameError(ShellValidationError):
    pass


class InvalidOutputPathError(ShellValidationError):
    pass


class InvalidDumpOptionsError(ShellValidationError):
    pass


class InvalidArchivePathError(ShellValidationError):
    pass


class InvalidSourcePathError(ShellValidationError):
    pass


class InvalidTarModeError(ShellValidationError):
    pass


class InvalidExcludePatternError(ShellValidationError):
    pass


class InvalidPathForDuError(ShellValidationError):
    pass


class InvalidPathForDfError(ShellValidationError):
    pass


class DockerSubcommandNotAllowedError(ShellValidationError):
    pass


class InvalidContainerNameError(ShellValidationError):
    pass


class InvalidDockerOptionError(ShellValidationError):
    pass


class InvalidArgumentError(ShellValidationError):
    """An argv element can never be handed to exec (e.g. it holds a NUL byte)."""


class ProcessError(ShellGuardError):
    """The external process could not be run to completion."""

    def __init__(self, message: str, command: str):
        super().__init__(message)
        self.command = command


class SpawnError(ProcessError):
    """The binary is missing, not executable, or the working directory is unusable."""


class CommandTimeoutError(ProcessError, TimeoutError):
    def __init__(self, message: str, command: str, timeout: float):
        super().__init__(message, command)
        self.timeout = timeout
