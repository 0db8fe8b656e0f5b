"""Errors raised by svn-cherrypick.

Every failure that should end a run derives from ``SvnCherrypickError`` so the
command line can turn it into a message and an exit status in one place.
Malformed log blocks are not errors; the parser skips them.
"""

from typing import Optional


class SvnCherrypickError(RuntimeError):
    """Base class for fatal svn-cherrypick errors."""


class UsageError(SvnCherrypickError):
    """The command line did not describe a usable run."""


class ToolNotFoundError(SvnCherrypickError):
    """The svn binary could not be found."""

    def __init__(self, binary: str):
        self.binary = binary
        super().__init__(f"{binary} not present in $PATH")


class QueryFailedError(SvnCherrypickError):
    """``svn mergeinfo`` exited non-zero."""

    def __init__(self, output: str, returncode: Optional[int] = None):
        self.output = output
        self.returncode = returncode
        super().__init__(output.strip() or f"svn mergeinfo failed with exit code {returncode}")


class DateParseError(SvnCherrypickError):
    """A header matched but its timestamp could not be parsed."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"error parsing date {text!r}")


class CherryPickFailedError(SvnCherrypickError):
    """``svn merge`` for a single revision exited non-zero."""

    def __init__(self, revision: str, returncode: int):
        self.revision = revision
        self.returncode = returncode
        super().__init__(f"Merging r{revision} failed with exit code {returncode}")
