"""Pipeline result models."""

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field


class SyncResult(BaseModel):
    """Outcome of one sync run."""

    started_at: str = Field(..., description="Run start, ISO 8601")
    username: str = Field(..., description="Author that was synced")
    listed: int = Field(0, description="Articles in the listing")
    written: List[Path] = Field(default_factory=list, description="Files written this run")
    failed: List[str] = Field(default_factory=list, description="Slugs whose detail fetch failed")
    pruned: List[Path] = Field(default_factory=list, description="Stale files removed")

    @property
    def success(self) -> bool:
        """True when every listed article was written."""
        return not self.failed and len(self.written) == self.listed
