"""svn-cherrypick - list and merge eligible svn revisions."""

__version__ = "0.1.0"
