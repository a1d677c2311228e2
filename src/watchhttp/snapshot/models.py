"""Domain models for captured command output."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Snapshot(BaseModel):
    """STDOUT of one command execution."""

    model_config = ConfigDict(frozen=True)

    stdout: bytes = Field(default=b"", description="Captured standard output")
    updated_at: datetime | None = Field(
        default=None, description="Wall-clock time of capture, None before the first run"
    )
    run_number: int = Field(default=0, ge=0, description="Sequential execution counter")
