from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from shellguard.core.models import ProcessResult
from tests.helpers import fake_process_result


@pytest.fixture
def exec_spy(monkeypatch):
    """
    Replace safe_exec in every operations module with one AsyncMock, so tests can
    assert whether (and with which argv) a process would have been spawned.
    """

    def _install(result: Optional[ProcessResult] = None) -> AsyncMock:
        spy = AsyncMock(return_value=result or fake_process_result())
        for module in ("pg_dump", "docker", "tar", "disk"):
            monkeypatch.setattr(f"shellguard.operations.{module}.safe_exec", spy)
        return spy

    return _install


@pytest.fixture(autouse=True)
def sentry_capture(monkeypatch):
    """Rejected inputs must never reach a real Sentry project from the test suite."""
    capture = MagicMock()
    monkeypatch.setattr(
        "shellguard.utils.sentry_helper.sentry_sdk.capture_event", capture
    )
    return capture
