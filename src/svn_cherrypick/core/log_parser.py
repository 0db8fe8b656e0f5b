"""Parser for the text output of ``svn mergeinfo --show-revs eligible --log``.

Each revision is printed as a block::

    ------------------------------------------------------------------------
    r12345 | username1 | 2000-01-01 00:00:53 +0000 (Sat, 01 Jan 2000) | 6 lines

    JIRA-12345, Issue with script
    ...

Only the header and the first message line of a block are used.
"""

import re
from datetime import datetime
from enum import Enum, auto
from typing import List, Optional

from loguru import logger

from svn_cherrypick.core.errors import DateParseError
from svn_cherrypick.models.commit import CommitRecord
from svn_cherrypick.models.config import DateMode

SEPARATOR_LINE = "-" * 72
HEADER_PATTERN = re.compile(r"^r(\d+)\s\|\s([^|]*)\s\|\s([^|]*)\|\s(.*)$")
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"
TIMESTAMP_WIDTH = 25
DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"
RAW_DATE_WIDTH = 10
DEFAULT_MESSAGE_LIMIT = 120
LEGACY_MESSAGE_LIMIT = 80
ELLIPSIS = "..."


class _State(Enum):
    SEEKING_SEPARATOR = auto()
    READING_HEADER = auto()
    SKIPPING_BLANK = auto()
    READING_MESSAGE = auto()


def format_timestamp(text: str, date_mode: DateMode = DateMode.LOCAL) -> str:
    """Turn the timestamp field of a header into a display date.

    Args:
        text: Timestamp field, e.g. ``2000-01-01 00:00:53 +0000 (Sat, ...)``
        date_mode: ``RAW`` keeps the date portion verbatim, ``LOCAL`` parses
            the timestamp and converts it to the local timezone

    Returns:
        Display date

    Raises:
        DateParseError: If ``LOCAL`` mode cannot parse the timestamp
    """
    if date_mode == DateMode.RAW:
        return text[:RAW_DATE_WIDTH]

    stamp = text[:TIMESTAMP_WIDTH]
    try:
        parsed = datetime.strptime(stamp, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise DateParseError(stamp) from e
    return parsed.astimezone().strftime(DISPLAY_FORMAT)


def truncate_message(message: str, limit: int = DEFAULT_MESSAGE_LIMIT) -> str:
    """Shorten a message longer than ``limit`` to exactly ``limit`` characters."""
    if len(message) > limit:
        return message[: limit - len(ELLIPSIS)] + ELLIPSIS
    return message


def _build_record(
    header: re.Match,
    message: str,
    source: Optional[str],
    date_mode: DateMode,
    message_limit: int,
) -> CommitRecord:
    revision, author, timestamp, _ = header.groups()
    return CommitRecord(
        revision=revision,
        author=author.strip(),
        date=format_timestamp(timestamp, date_mode),
        message=truncate_message(message, message_limit),
        source=source,
    )


def parse_mergeinfo_log(
    text: str,
    *,
    source: Optional[str] = None,
    date_mode: DateMode = DateMode.LOCAL,
    message_limit: int = DEFAULT_MESSAGE_LIMIT,
) -> List[CommitRecord]:
    """Parse eligible-revision log output into commit records.

    Blocks whose header line does not look like a revision header are
    skipped, as is a block cut off before its message line.

    Args:
        text: Combined output of ``svn mergeinfo --show-revs eligible --log``
        source: Resolved source path stored on every record
        date_mode: How to render the date column
        message_limit: Maximum message length, ellipsis included

    Returns:
        Records in the order svn printed them

    Raises:
        DateParseError: A matched header carries an unparsable timestamp
    """
    commits: List[CommitRecord] = []
    state = _State.SEEKING_SEPARATOR
    header: Optional[re.Match] = None

    for number, line in enumerate(text.splitlines(), start=1):
        if state is _State.SEEKING_SEPARATOR:
            if line == SEPARATOR_LINE:
                state = _State.READING_HEADER
        elif state is _State.READING_HEADER:
            header = HEADER_PATTERN.match(line)
            if header is None:
                logger.debug(f"Skipping block with malformed header at line {number}: {line!r}")
                state = _State.SEEKING_SEPARATOR
            else:
                state = _State.SKIPPING_BLANK
        elif state is _State.SKIPPING_BLANK:
            state = _State.READING_MESSAGE
        else:
            commits.append(_build_record(header, line, source, date_mode, message_limit))
            header = None
            state = _State.SEEKING_SEPARATOR

    if header is not None:
        logger.debug(f"Dropping r{header.group(1)}: log ended before its message")

    logger.debug(f"Parsed {len(commits)} eligible revisions")
    return commits
