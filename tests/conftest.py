"""Shared fixtures for svn-cherrypick tests."""

import pytest

MERGEINFO_DATA = """
------------------------------------------------------------------------
r12345 | username1 | 2000-01-01 00:00:53 +0000 (Wed, 12 Sep 2018) | 6 lines

JIRA-12345, Issue with script

Lorem Ipsum is simply dummy text of the printing and typesetting industry.
Lorem Ipsum has been the industry's standard dummy text ever since the 1500s,
when an unknown printer took a galley of type and scrambled it to make a type
specimen book. It has survived not only five centuries, but also the leap into
electronic typesetting....



------------------------------------------------------------------------
r12346 | user2 | 2002-01-01 00:00:58 +0000 (Wed, 19 Sep 2018) | 1 line

JIRA-12346 fixes
------------------------------------------------------------------------
r12347 | blaaaah | 2004-01-01 00:01:43 +0000 (Wed, 19 Sep 2018) | 1 line

JIRA-12347 more fixes
and some
and some
------------------------------------------------------------------------
"""


@pytest.fixture
def mergeinfo_data():
    """Output of ``svn mergeinfo --show-revs eligible --log`` for three revisions."""
    return MERGEINFO_DATA
