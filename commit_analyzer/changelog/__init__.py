"""Changelog Package"""

from commit_analyzer.changelog.document import Anchor, ChangelogDocument
from commit_analyzer.changelog.record import ChangeStats, CommitRecord, FileChanges, format_timestamp
from commit_analyzer.changelog.repository import ChangelogIoError, ChangelogRepository

__all__ = [
    "Anchor",
    "ChangelogDocument",
    "ChangeStats",
    "CommitRecord",
    "FileChanges",
    "format_timestamp",
    "ChangelogIoError",
    "ChangelogRepository",
]
