"""Compare the checked-out branch with a target branch.

Ranges follow git's conventions: the commit log uses the two-dot range
``target..HEAD`` (commits reachable from HEAD but not from target), while
statistics and the diff use the three-dot range ``target...HEAD`` so they
are computed against the merge base and ignore whatever landed on target
after the branches diverged.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from gitprobe.git.errors import (
    DetachedHead,
    ExecutionError,
    NoDefaultBranch,
    SameBranch,
    TargetBranchNotFound,
)
from gitprobe.git.models import CommitRecord, FileStat
from gitprobe.git.runner import CommandRunner

logger = logging.getLogger(__name__)

COMMIT_SEPARATOR = "---COMMIT---"
LOG_FORMAT = f"%H%n%an%n%ae%n%s%n%b%n{COMMIT_SEPARATOR}"
DEFAULT_BRANCHES = ("main", "master")
NO_COMMITS_DESCRIPTION = "No commits in this PR"
SUMMARY_HEADING = "## Commits in this PR"
DETAILS_HEADING = "## Commit details"

# Header lines per commit block: hash, author name, author email, subject.
_COMMIT_HEADER_LINES = 4
_DETACHED = "HEAD"


def parse_commit_log(output: str) -> List[CommitRecord]:
    """Parse ``git log`` output produced with :data:`LOG_FORMAT`."""
    commits: List[CommitRecord] = []
    for block in output.split(COMMIT_SEPARATOR):
        block = block.strip()
        if not block:
            continue
        lines = block.splitlines()
        if len(lines) < _COMMIT_HEADER_LINES:
            logger.debug("skipping malformed commit block: %r", block[:80])
            continue
        commits.append(
            CommitRecord(
                hash=lines[0].strip(),
                author_name=lines[1].strip(),
                author_email=lines[2].strip(),
                subject=lines[3].strip(),
                body="\n".join(lines[_COMMIT_HEADER_LINES:]).strip(),
            )
        )
    return commits


def _count(field: str) -> int:
    # Binary files show "-" instead of a number.
    try:
        return int(field)
    except ValueError:
        return 0


def parse_numstat_line(line: str) -> Optional[FileStat]:
    """Parse one ``additions<TAB>deletions<TAB>path`` line."""
    parts = line.split("\t", 2)
    if len(parts) < 3:
        return None
    return FileStat(path=parts[2], additions=_count(parts[0]), deletions=_count(parts[1]))


def parse_numstat(output: str) -> List[FileStat]:
    stats: List[FileStat] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        stat = parse_numstat_line(line)
        if stat is not None:
            stats.append(stat)
    return stats


def build_description(commits: List[CommitRecord]) -> str:
    """Render a markdown PR description, oldest commit first.

    *commits* is expected newest-first, the order ``git log`` prints.
    """
    if not commits:
        return NO_COMMITS_DESCRIPTION

    chronological = list(reversed(commits))
    lines = [SUMMARY_HEADING, ""]
    for commit in chronological:
        lines.append(f"- [{commit.short_hash}] {commit.subject} ({commit.author_name})")

    lines += ["", DETAILS_HEADING, ""]
    for commit in chronological:
        lines.append(f"### [{commit.short_hash}] {commit.subject}")
        if commit.body.strip():
            lines.append(commit.body)
        lines.append("")

    return "\n".join(lines).strip()


def extract_authors(commits: List[CommitRecord]) -> List[str]:
    return sorted({c.author_name for c in commits})


def validate_distinct(current: str, target: str) -> None:
    """Raise :class:`SameBranch` when there is nothing to compare."""
    if current == target:
        raise SameBranch(target)


class ChangeSetAnalyzer:
    """Compare the checked-out branch of a working copy against a target branch."""

    def __init__(self, path: Union[str, Path], runner: Optional[CommandRunner] = None) -> None:
        self.path = Path(path)
        self.runner = runner or CommandRunner()

    def _git(self, *args: str):
        return self.runner.run(self.path, args)

    # ---- branches ----

    def detect_target_branch(self) -> str:
        """Return ``main`` if it exists, else ``master``."""
        result = self._git("branch", "--list", *DEFAULT_BRANCHES)
        if not result.ok:
            raise ExecutionError("Failed to list branches")

        # "* main" for the checked-out branch, "+ main" for one checked out in a worktree
        names = {line.lstrip("*+ ").strip() for line in result.stdout.splitlines()}
        for candidate in DEFAULT_BRANCHES:
            if candidate in names:
                return candidate
        raise NoDefaultBranch()

    def resolve_target_branch(self, explicit: Optional[str] = None) -> str:
        """Use *explicit* if it names a commit, otherwise auto-detect."""
        if not explicit:
            return self.detect_target_branch()
        result = self._git("rev-parse", "--verify", "-q", f"{explicit}^{{commit}}")
        if not result.ok:
            raise TargetBranchNotFound(explicit)
        return explicit

    def current_branch(self) -> str:
        result = self._git("rev-parse", "--abbrev-ref", "HEAD")
        if not result.ok:
            raise ExecutionError("Failed to get current branch")
        branch = result.stdout.strip()
        if branch == _DETACHED:
            raise DetachedHead()
        return branch

    # ---- range queries ----

    def commit_log(self, target: str) -> List[CommitRecord]:
        result = self._git("log", f"{target}..HEAD", f"--format={LOG_FORMAT}", "--no-color")
        if not result.ok:
            raise ExecutionError("Failed to get commit log")
        if not result.stdout.strip():
            return []
        return parse_commit_log(result.stdout)

    def file_statistics(self, target: str) -> List[FileStat]:
        result = self._git("diff", "--numstat", "--no-color", f"{target}...HEAD")
        if not result.ok:
            raise ExecutionError("Failed to get file statistics")
        return parse_numstat(result.stdout)

    def diff(self, target: str, context_lines: int = 3) -> str:
        result = self._git("diff", f"{target}...HEAD", f"-U{context_lines}", "--no-color")
        if not result.ok or not result.stdout.strip():
            return ""
        return result.stdout
