"""Git interface layer."""

from gitprobe.git.analyzer import (
    ChangeSetAnalyzer,
    build_description,
    extract_authors,
    parse_commit_log,
    parse_numstat,
    validate_distinct,
)
from gitprobe.git.errors import (
    CommandFailed,
    CommandTimedOut,
    DetachedHead,
    ExecutionError,
    ExecutionUnavailable,
    GitError,
    NoDefaultBranch,
    SameBranch,
    TargetBranchNotFound,
)
from gitprobe.git.inspector import RepositoryInspector, parse_status_lines
from gitprobe.git.models import (
    ChangeSetReport,
    ChangeStatus,
    CommitRecord,
    FileChange,
    FileStat,
    StatusSnapshot,
)
from gitprobe.git.runner import CommandOutput, CommandRunner

__all__ = [
    "ChangeSetAnalyzer",
    "ChangeSetReport",
    "ChangeStatus",
    "CommandFailed",
    "CommandOutput",
    "CommandRunner",
    "CommandTimedOut",
    "CommitRecord",
    "DetachedHead",
    "ExecutionError",
    "ExecutionUnavailable",
    "FileChange",
    "FileStat",
    "GitError",
    "NoDefaultBranch",
    "RepositoryInspector",
    "SameBranch",
    "StatusSnapshot",
    "TargetBranchNotFound",
    "build_description",
    "extract_authors",
    "parse_commit_log",
    "parse_numstat",
    "parse_status_lines",
    "validate_distinct",
]
