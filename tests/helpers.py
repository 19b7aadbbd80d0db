import shutil

import pytest

from shellguard.core.models import ProcessResult


def fake_process_result(
    stdout: str = "", stderr: str = "", exit_code: int = 0
) -> ProcessResult:
    return ProcessResult(stdout=stdout, stderr=stderr, exit_code=exit_code)


def requires_binary(name: str):
    """Skip a test when `name` is not installed on the host running the suite."""
    return pytest.mark.skipif(
        shutil.which(name) is None, reason=f"{name} is not installed"
    )
