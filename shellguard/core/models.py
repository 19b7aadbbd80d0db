from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProcessResult(BaseModel):
    """Captured outcome of one process invocation. A non-zero exit_code is data, not an error."""

    model_config = ConfigDict(frozen=True)

    stdout: str
    stderr: str
    exit_code: int
    invocation: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class DiskUsage(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: int = Field(default=0, ge=0, description="Filesystem size in bytes")
    used: int = Field(default=0, ge=0, description="Bytes in use")
    free: int = Field(default=0, ge=0, description="Bytes available to unprivileged users")
    percentage: float = Field(default=0.0, ge=0, le=100)
