"""Run configuration built once from the command line."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class DateMode(str, Enum):
    """How the timestamp of a log entry is turned into a display date."""

    LOCAL = "local"  # Parse, convert to local time, show date and time
    RAW = "raw"  # First 10 characters of the log timestamp


class RunConfig(BaseModel):
    """Everything a single run needs, passed explicitly to the selector."""

    source: str
    revisions: List[str] = []
    tickets: List[str] = []
    author: Optional[str] = None
    grep: Optional[str] = None
    date_mode: DateMode = DateMode.LOCAL
    message_limit: int = Field(default=120, ge=4)
    svn_binary: str = "svn"
    target: str = "."
    dry_run: bool = False

    model_config = {"frozen": True}

    @property
    def cherry_picking(self) -> bool:
        """Revision filters turn a listing into a merge run."""
        return bool(self.revisions)
