"""Thin wrapper around the svn command line client."""

import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from svn_cherrypick.core.errors import (
    CherryPickFailedError,
    QueryFailedError,
    ToolNotFoundError,
)


class SvnClient:
    """Runs svn subcommands against a working copy."""

    def __init__(self, binary: str = "svn", cwd: Optional[Union[str, Path]] = None):
        self.binary = binary
        self.cwd = Path(cwd) if cwd is not None else None

    def ensure_available(self) -> None:
        """Raise ToolNotFoundError if the svn binary is not on $PATH."""
        if shutil.which(self.binary) is None:
            raise ToolNotFoundError(self.binary)

    def _run(self, args: List[str], capture: bool) -> subprocess.CompletedProcess:
        cmd = [self.binary] + args
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            if capture:
                # svn reports problems on stderr; keep them next to stdout
                return subprocess.run(  # noqa: S603
                    cmd,
                    cwd=self.cwd,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    text=True,
                    check=False,
                )
            return subprocess.run(cmd, cwd=self.cwd, check=False)  # noqa: S603
        except FileNotFoundError as e:
            raise ToolNotFoundError(self.binary) from e

    def eligible_log(self, source: str, target: str = ".") -> str:
        """Return the log of revisions from ``source`` not yet merged into ``target``."""
        self.ensure_available()
        result = self._run(
            ["mergeinfo", "--show-revs", "eligible", "--log", source, target],
            capture=True,
        )
        if result.returncode != 0:
            raise QueryFailedError(result.stdout or "", result.returncode)
        return result.stdout or ""

    def merge(self, revision: str, source: str, target: str = ".") -> None:
        """Merge a single revision, letting svn write straight to the terminal."""
        self.ensure_available()
        result = self._run(["merge", "-c", revision, source, target], capture=False)
        if result.returncode != 0:
            raise CherryPickFailedError(revision, result.returncode)

    def version(self) -> str:
        """Return the svn client version, e.g. ``1.14.2``."""
        self.ensure_available()
        result = self._run(["--version", "--quiet"], capture=True)
        if result.returncode != 0:
            raise QueryFailedError(result.stdout or "", result.returncode)
        return (result.stdout or "").strip()
