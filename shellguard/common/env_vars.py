import json
import os
from typing import Optional


def load_bool(env_var, default: Optional[bool]) -> Optional[bool]:
    env_value = os.environ.get(env_var)
    if env_value is None:
        return default

    return json.loads(env_value.lower())


# Default timeout for safe_exec when the caller does not pass one
SHELLGUARD_EXEC_TIMEOUT_SECONDS = float(
    os.environ.get("SHELLGUARD_EXEC_TIMEOUT_SECONDS", 60)
)
# Time between SIGTERM and SIGKILL when a command overruns its timeout
SHELLGUARD_KILL_GRACE_SECONDS = float(
    os.environ.get("SHELLGUARD_KILL_GRACE_SECONDS", 5)
)

SHELLGUARD_PG_DUMP_TIMEOUT_SECONDS = float(
    os.environ.get("SHELLGUARD_PG_DUMP_TIMEOUT_SECONDS", 300)
)
SHELLGUARD_DOCKER_TIMEOUT_SECONDS = float(
    os.environ.get("SHELLGUARD_DOCKER_TIMEOUT_SECONDS", 120)
)
SHELLGUARD_TAR_TIMEOUT_SECONDS = float(
    os.environ.get("SHELLGUARD_TAR_TIMEOUT_SECONDS", 600)
)
SHELLGUARD_DU_TIMEOUT_SECONDS = float(os.environ.get("SHELLGUARD_DU_TIMEOUT_SECONDS", 30))
SHELLGUARD_DF_TIMEOUT_SECONDS = float(os.environ.get("SHELLGUARD_DF_TIMEOUT_SECONDS", 10))

# Send a Sentry warning every time an operation refuses its input
SHELLGUARD_REPORT_REJECTIONS = load_bool("SHELLGUARD_REPORT_REJECTIONS", True)

SENTRY_DSN = os.environ.get("SENTRY_DSN", "")
SENTRY_TRACES_SAMPLE_RATE = float(os.environ.get("SENTRY_TRACES_SAMPLE_RATE", "0.0"))
