from pathlib import Path

from pydantic import BaseModel, Field


class SaveOutcome(BaseModel):
    """Result of persisting the order queue to disk."""

    saved: bool = Field(..., description="Whether any location was written")
    path: Path | None = Field(default=None, description="Location actually written")
    used_fallback: bool = Field(
        default=False, description="Whether the primary location was refused"
    )
    error: str | None = Field(default=None, description="Last error message, if any")
