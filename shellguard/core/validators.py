"""
Allow-list predicates for untrusted strings that end up in an argument vector.

Every validator answers True/False and never raises, so callers can branch on
the verdict and raise the error that names their own context.
"""

import re
from typing import Any, Iterable, Optional, Union

PG_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
PG_IDENTIFIER_MAX_LENGTH = 63

DOCKER_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9._-]*$")
DOCKER_NAME_MAX_LENGTH = 255

HOSTNAME_LABEL_PATTERN = re.compile(r"^[A-Za-z0-9]([A-Za-z0-9-]*[A-Za-z0-9])?$")
HOSTNAME_MAX_LENGTH = 253
HOSTNAME_LABEL_MAX_LENGTH = 63

PATH_COMPONENT_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")
PATH_COMPONENT_MAX_LENGTH = 255


def _matches(pattern: re.Pattern, value: Any, max_length: int) -> bool:
    if not isinstance(value, str) or not value or len(value) > max_length:
        return False
    # fullmatch: "$" alone would accept a trailing newline
    return pattern.fullmatch(value) is not None


def validate_pg_identifier(identifier: Any) -> bool:
    """PostgreSQL database, role or table name (unquoted identifier rules, 63 chars max)."""
    return _matches(PG_IDENTIFIER_PATTERN, identifier, PG_IDENTIFIER_MAX_LENGTH)


def validate_docker_name(name: Any) -> bool:
    """Container, image, volume or network name. Lowercase only."""
    return _matches(DOCKER_NAME_PATTERN, name, DOCKER_NAME_MAX_LENGTH)


def validate_hostname(hostname: Any) -> bool:
    if not isinstance(hostname, str) or not hostname:
        return False
    if len(hostname) > HOSTNAME_MAX_LENGTH:
        return False
    return all(
        _matches(HOSTNAME_LABEL_PATTERN, label, HOSTNAME_LABEL_MAX_LENGTH)
        for label in hostname.split(".")
    )


def normalize_path(path: str) -> Optional[str]:
    """
    Lexically normalize an absolute path: collapse repeated slashes and "." segments.
    Returns None when the path is not absolute, holds a NUL byte or has a ".." segment.
    Nothing is resolved against the filesystem, so symlinks are not followed.
    """
    if not isinstance(path, str) or not path.startswith("/") or "\0" in path:
        return None

    segments = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            return None
        segments.append(segment)
    return "/" + "/".join(segments)


def is_under_root(normalized_path: str, root: str) -> bool:
    normalized_root = normalize_path(root)
    if normalized_root is None:
        return False
    if normalized_root == "/":
        return True
    return normalized_path == normalized_root or normalized_path.startswith(
        normalized_root + "/"
    )


def validate_path(
    file_path: Any, allowed_roots: Union[str, Iterable[str], None] = None
) -> bool:
    """
    Absolute path with no traversal. When allowed_roots is given, the path must
    be one of the roots or live beneath one (matching stops at a "/" boundary,
    so "/var/www2" is not under "/var/www").
    """
    normalized = normalize_path(file_path)
    if normalized is None:
        return False

    if isinstance(allowed_roots, str):
        allowed_roots = (allowed_roots,)
    try:
        roots = tuple(allowed_roots or ())
    except TypeError:
        # not iterable: no root can match
        return False
    if roots:
        return any(is_under_root(normalized, root) for root in roots)
    return True


def validate_path_component(component: Any) -> bool:
    """A single file or directory name: no separators and no "." / ".." entries."""
    if component in (".", ".."):
        return False
    return _matches(PATH_COMPONENT_PATTERN, component, PATH_COMPONENT_MAX_LENGTH)
