"""Commit model for eligible svn revisions."""

import re
from typing import List, Optional

from pydantic import BaseModel

TICKET_PATTERN = re.compile(r"[A-Z]+-[0-9]+")


class CommitRecord(BaseModel):
    """A single revision listed by ``svn mergeinfo --show-revs eligible --log``."""

    revision: str
    author: str
    date: str
    message: str
    source: Optional[str] = None  # Resolved path the revision is merged from

    model_config = {"frozen": True}

    @property
    def tickets(self) -> List[str]:
        """Ticket identifiers (``ABC-123``) mentioned in the message."""
        return TICKET_PATTERN.findall(self.message)
