"""
Version helpers for shellguard.
"""

from functools import cache
from importlib.metadata import PackageNotFoundError, version


def is_official_release() -> bool:
    """Check if this is an official release (version was patched by CI/CD)"""
    from shellguard import __version__

    return not __version__.startswith("0.0.0")


@cache
def get_version() -> str:
    from shellguard import __version__

    if is_official_release():
        return __version__

    # editable installs report the version from the package metadata
    try:
        return f"dev-{version('shellguard')}"
    except PackageNotFoundError:
        return f"dev-{__version__}"
