"""Working-copy inspection."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from gitprobe.git.errors import CommandFailed, ExecutionError, ExecutionUnavailable
from gitprobe.git.models import ChangeStatus, FileChange
from gitprobe.git.runner import CommandRunner

logger = logging.getLogger(__name__)

# Two status slots plus the separating space.
_STATUS_HEADER_WIDTH = 3
_UNTRACKED = "??"


def parse_status_lines(
    output: str, include_untracked: bool = True
) -> Tuple[List[FileChange], List[FileChange], List[str]]:
    """Split ``git status --porcelain=v1`` output into staged, unstaged, untracked.

    A line lands in exactly one bucket: the index slot wins over the
    worktree slot, so ``MM file`` is reported as staged only.
    """
    staged: List[FileChange] = []
    unstaged: List[FileChange] = []
    untracked: List[str] = []

    for line in output.splitlines():
        if not line.strip() or len(line) < _STATUS_HEADER_WIDTH:
            continue
        code = line[:2]
        path = line[_STATUS_HEADER_WIDTH:]

        if code == _UNTRACKED:
            if include_untracked:
                untracked.append(path)
        elif code[0] != " ":
            staged.append(FileChange(path=path, status=ChangeStatus.from_code(code[0])))
        elif code[1] != " ":
            unstaged.append(FileChange(path=path, status=ChangeStatus.from_code(code[1])))

    return staged, unstaged, untracked


class RepositoryInspector:
    """Read-only view of one working copy."""

    def __init__(self, path: Union[str, Path], runner: Optional[CommandRunner] = None) -> None:
        self.path = Path(path)
        self.runner = runner or CommandRunner()

    def _git(self, *args: str):
        return self.runner.run(self.path, args)

    def validate(self) -> Optional[str]:
        """Return a description of why the path is unusable, or None if it is fine."""
        if not self.path.exists():
            return f"Repository path does not exist: {self.path}"
        if not self.path.is_dir():
            return f"Path is not a directory: {self.path}"

        try:
            probe = self._git("rev-parse", "--git-dir")
        except ExecutionUnavailable:
            return "Git command not found. Please ensure git is installed."
        except CommandFailed as exc:
            logger.debug("repository probe failed: %s", exc.stderr.strip())
            return f"Not a git repository: {self.path}"
        except ExecutionError as exc:
            return f"Error validating repository: {exc}"

        if not probe.ok:
            return f"Not a git repository: {self.path}"
        return None

    def has_commits(self) -> bool:
        return self._git("rev-parse", "--verify", "-q", "HEAD").ok

    def current_branch(self) -> str:
        """Name of the checked-out branch (``HEAD`` when detached)."""
        if not self.has_commits():
            # Unborn branch: rev-parse cannot resolve HEAD yet.
            unborn = self._git("symbolic-ref", "--short", "HEAD")
            if unborn.ok and unborn.stdout.strip():
                return unborn.stdout.strip()
        result = self._git("rev-parse", "--abbrev-ref", "HEAD")
        if not result.ok:
            raise ExecutionError("Failed to get current branch")
        return result.stdout.strip()

    def file_changes(
        self, include_untracked: bool = True
    ) -> Tuple[List[FileChange], List[FileChange], List[str]]:
        result = self._git("status", "--porcelain=v1")
        if not result.ok:
            raise ExecutionError("Failed to get git status")
        return parse_status_lines(result.stdout, include_untracked)

    def diff(self, context_lines: int = 3) -> str:
        """Unified diff of the working copy against HEAD; empty when there is none."""
        if not self.has_commits():
            return ""
        result = self._git("diff", "HEAD", f"-U{context_lines}", "--no-color")
        if not result.ok or not result.stdout.strip():
            return ""
        return result.stdout
