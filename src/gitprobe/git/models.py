"""Data models for working-copy status and branch comparison."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class ChangeStatus(str, Enum):
    MODIFIED = "modified"
    ADDED = "added"
    DELETED = "deleted"
    RENAMED = "renamed"
    COPIED = "copied"
    UPDATED = "updated"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: str) -> "ChangeStatus":
        """Map one porcelain status letter to a ChangeStatus."""
        return _STATUS_CODES.get(code, cls.UNKNOWN)


_STATUS_CODES: Dict[str, ChangeStatus] = {
    "M": ChangeStatus.MODIFIED,
    "A": ChangeStatus.ADDED,
    "D": ChangeStatus.DELETED,
    "R": ChangeStatus.RENAMED,
    "C": ChangeStatus.COPIED,
    "U": ChangeStatus.UPDATED,
}


@dataclass(frozen=True)
class FileChange:
    """A file listed by ``git status`` with its change kind."""

    path: str
    status: ChangeStatus

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "status": self.status.value}


@dataclass(frozen=True)
class StatusSnapshot:
    branch: str
    staged: List[FileChange] = field(default_factory=list)
    unstaged: List[FileChange] = field(default_factory=list)
    untracked: List[str] = field(default_factory=list)
    diff: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "branch": self.branch,
            "staged": [c.to_dict() for c in self.staged],
            "unstaged": [c.to_dict() for c in self.unstaged],
            "untracked": list(self.untracked),
            "diff": self.diff,
        }


@dataclass(frozen=True)
class CommitRecord:
    """One commit of the compared range, as printed by ``git log``."""

    hash: str
    author_name: str
    author_email: str
    subject: str
    body: str = ""

    @property
    def short_hash(self) -> str:
        return self.hash[:7]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hash": self.hash,
            "authorName": self.author_name,
            "authorEmail": self.author_email,
            "subject": self.subject,
            "body": self.body,
        }


@dataclass(frozen=True)
class FileStat:
    """Line counts for one file; binary files report 0/0."""

    path: str
    additions: int = 0
    deletions: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "additions": self.additions,
            "deletions": self.deletions,
        }


@dataclass(frozen=True)
class ChangeSetReport:
    """Pull-request style summary of the current branch against a target."""

    title: str
    description: str
    source_branch: str
    target_branch: str
    author: str
    all_authors: List[str] = field(default_factory=list)
    commits: List[CommitRecord] = field(default_factory=list)
    changed_files: List[FileStat] = field(default_factory=list)
    diff: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "sourceBranch": self.source_branch,
            "targetBranch": self.target_branch,
            "author": self.author,
            "allAuthors": list(self.all_authors),
            "commits": [c.to_dict() for c in self.commits],
            "changedFiles": [f.to_dict() for f in self.changed_files],
            "diff": self.diff,
        }
