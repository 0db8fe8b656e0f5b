"""Filtering of eligible revisions and resolution of the merge source."""

import re
from typing import Iterable, List, Optional, Sequence, Tuple

from loguru import logger
from pydantic import BaseModel

from svn_cherrypick.core.errors import UsageError
from svn_cherrypick.models.commit import CommitRecord
from svn_cherrypick.models.config import RunConfig

ROOT_MARKER = "^/"
TRUNK = "trunk"
BRANCHES_PREFIX = "branches/"
REVISION_ARGUMENT = re.compile(r"[+-]?[0-9]+")


class Selection(BaseModel):
    """Outcome of filtering: commits to show, or commits to merge."""

    listed: List[CommitRecord] = []
    cherry_picks: List[CommitRecord] = []
    requested_revisions: List[str] = []
    filtered_revisions: List[str] = []  # Eligible, but dropped by ticket/author/grep

    model_config = {"frozen": True}

    @property
    def missing_revisions(self) -> List[str]:
        """Requested revisions that no selected commit carries."""
        picked = {commit.revision for commit in self.cherry_picks}
        return [rev for rev in self.requested_revisions if rev not in picked]

    @property
    def not_eligible_revisions(self) -> List[str]:
        """Requested revisions that svn did not list as eligible at all."""
        filtered = set(self.filtered_revisions)
        return [rev for rev in self.missing_revisions if rev not in filtered]


def classify_arguments(args: Iterable[str]) -> Tuple[List[str], List[str]]:
    """Split filter arguments into revision numbers and ticket identifiers.

    Anything that reads as a base-10 integer is a revision, everything else
    is a ticket. Revisions come back sorted numerically, tickets in the
    order given.
    """
    revisions: List[str] = []
    tickets: List[str] = []
    for arg in args:
        if REVISION_ARGUMENT.fullmatch(arg):
            revisions.append(arg)
        else:
            tickets.append(arg)
    revisions.sort(key=int)
    return revisions, tickets


def resolve_source(source: str) -> str:
    """Expand a branch name into a repository-root relative path.

    >>> resolve_source("trunk")
    '^/trunk'
    >>> resolve_source("release-1")
    '^/branches/release-1'
    """
    if not source:
        raise UsageError("Missing source path, branch name or 'trunk'")
    if source.startswith(ROOT_MARKER):
        return source
    if source != TRUNK and not source.startswith(BRANCHES_PREFIX):
        source = BRANCHES_PREFIX + source
    return ROOT_MARKER + source


def matches_revision(commit: CommitRecord, revisions: Sequence[str]) -> bool:
    return commit.revision in revisions


def matches_ticket(commit: CommitRecord, tickets: Sequence[str]) -> bool:
    """True if the message mentions one of ``tickets``; never for no tickets."""
    if not tickets:
        return False
    return any(ticket in tickets for ticket in commit.tickets)


def matches_author(commit: CommitRecord, author: Optional[str]) -> bool:
    return author is None or commit.author == author


def matches_grep(commit: CommitRecord, grep: Optional[str]) -> bool:
    return grep is None or grep.lower() in commit.message.lower()


def _passes_filters(commit: CommitRecord, config: RunConfig) -> bool:
    if config.tickets and not matches_ticket(commit, config.tickets):
        return False
    return matches_author(commit, config.author) and matches_grep(commit, config.grep)


def select(commits: Iterable[CommitRecord], config: RunConfig) -> Selection:
    """Apply the filters of ``config`` to ``commits``, keeping their order.

    Ticket, author and message filters narrow the candidates. When revision
    filters are given, matching candidates are to be merged and the rest are
    dropped; otherwise every candidate is listed.
    """
    listed: List[CommitRecord] = []
    cherry_picks: List[CommitRecord] = []
    filtered: List[str] = []

    for commit in commits:
        if not _passes_filters(commit, config):
            if config.cherry_picking and matches_revision(commit, config.revisions):
                filtered.append(commit.revision)
            continue

        if config.cherry_picking:
            if matches_revision(commit, config.revisions):
                cherry_picks.append(commit)
        else:
            listed.append(commit)

    logger.debug(f"Selected {len(listed)} to list, {len(cherry_picks)} to merge")
    return Selection(
        listed=listed,
        cherry_picks=cherry_picks,
        requested_revisions=config.revisions,
        filtered_revisions=filtered,
    )
