import logging
from typing import Any, Optional

import sentry_sdk

from shellguard.common.env_vars import (
    SENTRY_DSN,
    SENTRY_TRACES_SAMPLE_RATE,
    SHELLGUARD_REPORT_REJECTIONS,
)
from shellguard.utils.log_sanitizer import sanitize_for_log


def init_sentry() -> bool:
    """Initialise the Sentry client when SENTRY_DSN is set. Returns whether it was enabled."""
    if not SENTRY_DSN:
        return False
    sentry_sdk.init(
        dsn=SENTRY_DSN,
        traces_sample_rate=SENTRY_TRACES_SAMPLE_RATE,
        send_default_pii=False,
    )
    return True


def capture_rejected_input(
    operation: str, error: Exception, params: Optional[dict[str, Any]] = None
) -> None:
    """
    Record an input that an operation refused before spawning anything.
    Parameters are redacted first; without a configured client the capture is a no-op.
    """
    safe_params = sanitize_for_log(params or {})
    logging.info(f"Refusing {operation}: {error}")

    if not SHELLGUARD_REPORT_REJECTIONS:
        return

    sentry_sdk.capture_event(
        {
            "message": f"Unsafe {operation} input rejected",
            "level": "warning",
            "tags": {
                "operation": operation,
                "error_type": type(error).__name__,
            },
            "extra": {
                "params": safe_params,
                "error": str(error),
            },
        }
    )
