"""Data models for svn-cherrypick."""

from .commit import CommitRecord
from .config import DateMode, RunConfig

__all__ = ["CommitRecord", "DateMode", "RunConfig"]
