"""Exception hierarchy for git inspection failures."""

from __future__ import annotations

from typing import Sequence


class GitError(Exception):
    """Base class for every failure the inspection layer reports."""


class ExecutionUnavailable(GitError):
    """Raised when the git executable cannot be started at all."""

    def __init__(self, binary: str = "git") -> None:
        super().__init__(f"{binary} is not installed or not on PATH")
        self.binary = binary


class ExecutionError(GitError):
    """Raised when a required git command does not succeed."""


class CommandFailed(ExecutionError):
    """Raised when git exits non-zero and writes to stderr."""

    def __init__(self, args: Sequence[str], stderr: str) -> None:
        super().__init__(f"Git command failed: {stderr.strip()}")
        self.args_list = list(args)
        self.stderr = stderr


class CommandTimedOut(ExecutionError):
    """Raised when git does not finish within the configured timeout."""

    def __init__(self, args: Sequence[str], timeout: float) -> None:
        super().__init__(f"Git command timed out after {timeout}s: git {' '.join(args)}")
        self.args_list = list(args)
        self.timeout = timeout


class DetachedHead(GitError):
    """Raised when HEAD points at a commit rather than a branch."""

    def __init__(self) -> None:
        super().__init__("Cannot create PR from detached HEAD state")


class NoDefaultBranch(GitError):
    """Raised when no target was given and neither main nor master exists."""

    def __init__(self) -> None:
        super().__init__(
            "Neither 'main' nor 'master' branch exists. "
            "Please specify target_branch parameter."
        )


class TargetBranchNotFound(GitError):
    """Raised when an explicitly requested target branch cannot be resolved."""

    def __init__(self, branch: str) -> None:
        super().__init__(f"Target branch does not exist: {branch}")
        self.branch = branch


class SameBranch(GitError):
    """Raised when the source and target branch are the same."""

    def __init__(self, branch: str) -> None:
        super().__init__(
            f"No pull request is open - you are on the target branch '{branch}'"
        )
        self.branch = branch
