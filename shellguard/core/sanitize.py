import re
from typing import Iterable

# Everything outside letters, digits and - _ . / @ space is dropped
UNSAFE_SHELL_CHARS_PATTERN = re.compile(r"[^A-Za-z0-9\-_./@ ]")

# Tokens made only of these characters read the same quoted or bare
SAFE_SHELL_CHARS = frozenset(".-_=/,:@+%")


def _require_str(arg) -> None:
    if not isinstance(arg, str):
        raise TypeError("Shell argument must be a string")


def sanitize_shell_arg(arg: str) -> str:
    """
    Strip every character a shell could treat as syntax.

    This is lossy on purpose: the result stays inert even if a caller later
    mishandles it. It does not replace validation, which rejects instead of
    rewriting; use it for free-text labels that still have to travel as a
    single descriptive token.
    """
    _require_str(arg)
    return UNSAFE_SHELL_CHARS_PATTERN.sub("", arg)


def escape_shell_arg(arg: str) -> str:
    """
    Quote a value for a POSIX shell: wrap it in single quotes and turn every
    embedded quote into '\\'' (close, escaped quote, reopen).
    """
    _require_str(arg)
    return "'" + arg.replace("'", "'\\''") + "'"


def render_argv(argv: Iterable[str]) -> str:
    """
    Human-readable form of an argument vector for logs and error reports.
    The output is never executed; safe_exec always receives the list itself.
    """
    rendered = []
    for arg in argv:
        if arg and all(c.isascii() and (c.isalnum() or c in SAFE_SHELL_CHARS) for c in arg):
            rendered.append(arg)
        else:
            rendered.append(escape_shell_arg(str(arg)))
    return " ".join(rendered)
