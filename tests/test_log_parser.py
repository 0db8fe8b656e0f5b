"""Tests for the mergeinfo log parser."""

from datetime import datetime, timedelta, timezone

import pytest

from svn_cherrypick.core.errors import DateParseError
from svn_cherrypick.core.log_parser import (
    LEGACY_MESSAGE_LIMIT,
    SEPARATOR_LINE,
    format_timestamp,
    parse_mergeinfo_log,
    truncate_message,
)
from svn_cherrypick.models.config import DateMode

LONG_LINE = (
    "Lorem Ipsum is simply dummy text of the printing and typesetting industry. "
    "Lorem Ipsum has been the industry's standard dummy text ever since the 1500s, "
    "when an unknown printer took a galley of type."
)


def _local(year, month, day, hour, minute, second, offset_hours=0):
    """Expected local display string for a logged timestamp."""
    stamp = datetime(
        year, month, day, hour, minute, second,
        tzinfo=timezone(timedelta(hours=offset_hours)),
    )
    return stamp.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def test_parse_three_blocks_raw_dates(mergeinfo_data):
    """Test parsing three well formed blocks keeps order and first lines."""
    commits = parse_mergeinfo_log(mergeinfo_data, date_mode=DateMode.RAW)

    assert len(commits) == 3
    expected = [
        ("12345", "username1", "2000-01-01", "JIRA-12345, Issue with script"),
        ("12346", "user2", "2002-01-01", "JIRA-12346 fixes"),
        ("12347", "blaaaah", "2004-01-01", "JIRA-12347 more fixes"),
    ]
    actual = [(c.revision, c.author, c.date, c.message) for c in commits]
    assert actual == expected


def test_parse_local_dates(mergeinfo_data):
    """Test local date mode converts the logged offset to local time."""
    commits = parse_mergeinfo_log(mergeinfo_data)

    assert [c.date for c in commits] == [
        _local(2000, 1, 1, 0, 0, 53),
        _local(2002, 1, 1, 0, 0, 58),
        _local(2004, 1, 1, 0, 1, 43),
    ]


def test_parse_stores_source(mergeinfo_data):
    commits = parse_mergeinfo_log(mergeinfo_data, source="^/branches/foo")
    assert {c.source for c in commits} == {"^/branches/foo"}


def test_parse_empty_input():
    """Test empty input yields no records and no error."""
    assert parse_mergeinfo_log("") == []
    assert parse_mergeinfo_log("\n\n") == []


def test_parse_only_separator():
    assert parse_mergeinfo_log(SEPARATOR_LINE + "\n") == []


def test_multiline_message_keeps_first_line_truncated():
    """Test a long multi-line message contributes only its first line."""
    text = "\n".join(
        [
            SEPARATOR_LINE,
            "r1 | me | 2018-09-12 10:00:00 +0300 (Wed, 12 Sep 2018) | 6 lines",
            "",
            LONG_LINE,
            "second line",
            "third line",
            "",
            "",
            SEPARATOR_LINE,
        ]
    )

    commits = parse_mergeinfo_log(text)

    assert len(commits) == 1
    assert len(commits[0].message) == 120
    assert commits[0].message == LONG_LINE[:117] + "..."


def test_legacy_message_limit():
    text = "\n".join(
        [
            SEPARATOR_LINE,
            "r1 | me | 2018-09-12 10:00:00 +0000 (Wed, 12 Sep 2018) | 1 line",
            "",
            LONG_LINE,
            SEPARATOR_LINE,
        ]
    )

    commits = parse_mergeinfo_log(text, message_limit=LEGACY_MESSAGE_LIMIT)

    assert commits[0].message == LONG_LINE[:77] + "..."


def test_malformed_header_skipped():
    """Test a header without its separators is dropped but parsing continues."""
    text = "\n".join(
        [
            SEPARATOR_LINE,
            "r10 | broken 2018-09-12 10:00:00 +0000 (Wed, 12 Sep 2018) | 1 line",
            "",
            "JIRA-1 lost",
            SEPARATOR_LINE,
            "r11 | user | 2018-09-12 10:00:00 +0000 (Wed, 12 Sep 2018) | 1 line",
            "",
            "JIRA-2 kept",
            SEPARATOR_LINE,
        ]
    )

    commits = parse_mergeinfo_log(text, date_mode=DateMode.RAW)

    assert [c.revision for c in commits] == ["11"]
    assert commits[0].message == "JIRA-2 kept"


def test_header_without_revision_number_skipped():
    text = "\n".join(
        [
            SEPARATOR_LINE,
            "r | user | 2018-09-12 10:00:00 +0000 (Wed, 12 Sep 2018) | 1 line",
            "",
            "nothing",
            SEPARATOR_LINE,
        ]
    )
    assert parse_mergeinfo_log(text) == []


def test_truncated_trailing_block_dropped(mergeinfo_data):
    """Test a block cut off before its message line is ignored."""
    text = mergeinfo_data + (
        "r12348 | user2 | 2005-01-01 00:00:00 +0000 (Sat, 01 Jan 2005) | 1 line\n"
    )

    commits = parse_mergeinfo_log(text, date_mode=DateMode.RAW)

    assert [c.revision for c in commits] == ["12345", "12346", "12347"]


def test_windows_line_endings(mergeinfo_data):
    text = mergeinfo_data.replace("\n", "\r\n")
    commits = parse_mergeinfo_log(text, date_mode=DateMode.RAW)
    assert [c.message for c in commits][1] == "JIRA-12346 fixes"


def test_author_is_trimmed():
    text = "\n".join(
        [
            SEPARATOR_LINE,
            "r7 |  spaced name  | 2018-09-12 10:00:00 +0000 (Wed, 12 Sep 2018) | 1 line",
            "",
            "msg",
        ]
    )
    commits = parse_mergeinfo_log(text)
    assert commits[0].author == "spaced name"


def test_bad_timestamp_is_fatal_in_local_mode():
    """Test an unparsable date aborts the parse instead of skipping."""
    text = "\n".join(
        [
            SEPARATOR_LINE,
            "r1 | me | yesterday around noon, give or take | 1 line",
            "",
            "msg",
        ]
    )

    with pytest.raises(DateParseError):
        parse_mergeinfo_log(text)

    # Raw mode does not look at the timestamp
    commits = parse_mergeinfo_log(text, date_mode=DateMode.RAW)
    assert commits[0].date == "yesterday "


class TestHelpers:
    """Test the formatting helpers used by the parser."""

    def test_format_timestamp_raw(self):
        assert format_timestamp("2000-01-01 00:00:53 +0000 (Sat)", DateMode.RAW) == "2000-01-01"

    def test_format_timestamp_with_offset(self):
        result = format_timestamp("2018-09-12 10:00:00 +0300 (Wed, 12 Sep 2018) ")
        assert result == _local(2018, 9, 12, 10, 0, 0, offset_hours=3)

    def test_truncate_short_message_unchanged(self):
        assert truncate_message("short", 120) == "short"

    def test_truncate_exact_limit_unchanged(self):
        message = "x" * 120
        assert truncate_message(message, 120) == message

    def test_truncate_long_message(self):
        assert truncate_message("x" * 121, 120) == "x" * 117 + "..."
