"""The two tool operations: configuration in, result record or error record out.

These are the two entry points the MCP server and the CLI call. Nothing
raised below this layer escapes: git failures become ``{"error": ...}``
and partial results are never returned.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from gitprobe.git.analyzer import (
    ChangeSetAnalyzer,
    build_description,
    extract_authors,
    validate_distinct,
)
from gitprobe.git.errors import GitError
from gitprobe.git.inspector import RepositoryInspector
from gitprobe.git.models import ChangeSetReport, StatusSnapshot
from gitprobe.git.runner import CommandRunner

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

NO_COMMITS_PREFIX = "No commits to create a PR from"


def error_record(message: str) -> Record:
    return {"error": message}


def is_error(record: Record) -> bool:
    return set(record) == {"error"}


def is_up_to_date(record: Record) -> bool:
    """True for the informational record returned when no commits separate the branches."""
    return is_error(record) and record["error"].startswith(NO_COMMITS_PREFIX)


def no_commits_message(source: str, target: str) -> str:
    return f"{NO_COMMITS_PREFIX} - branch '{source}' is up to date with '{target}'"


def _resolve_path(repository_path: Optional[Union[str, Path]]) -> Path:
    return Path(repository_path) if repository_path else Path(os.getcwd())


def git_status(
    repository_path: Optional[Union[str, Path]] = None,
    include_untracked: bool = True,
    diff_context_lines: int = 3,
    *,
    runner: Optional[CommandRunner] = None,
) -> Record:
    """Branch, staged / unstaged / untracked files and the diff against HEAD."""
    path = _resolve_path(repository_path)
    inspector = RepositoryInspector(path, runner)

    problem = inspector.validate()
    if problem:
        logger.warning("git_status: %s", problem)
        return error_record(problem)

    try:
        branch = inspector.current_branch()
        staged, unstaged, untracked = inspector.file_changes(include_untracked)
        diff = inspector.diff(diff_context_lines)
    except GitError as exc:
        logger.warning("git_status failed for %s: %s", path, exc)
        return error_record(str(exc) or "Unknown error occurred")
    except Exception as exc:
        logger.exception("git_status crashed for %s", path)
        return error_record(f"Unexpected error: {exc}")

    snapshot = StatusSnapshot(
        branch=branch,
        staged=staged,
        unstaged=unstaged,
        untracked=untracked if include_untracked else [],
        diff=diff,
    )
    return snapshot.to_dict()


def pr_info(
    repository_path: Optional[Union[str, Path]] = None,
    target_branch: Optional[str] = None,
    diff_context_lines: int = 3,
    *,
    runner: Optional[CommandRunner] = None,
) -> Record:
    """Compare the current branch with *target_branch* (or main/master)."""
    path = _resolve_path(repository_path)

    problem = RepositoryInspector(path, runner).validate()
    if problem:
        logger.warning("pr_info: %s", problem)
        return error_record(problem)

    analyzer = ChangeSetAnalyzer(path, runner)
    try:
        source = analyzer.current_branch()
        target = analyzer.resolve_target_branch(target_branch)
        validate_distinct(source, target)

        commits = analyzer.commit_log(target)
        if not commits:
            logger.info("%s has no commits ahead of %s", source, target)
            return error_record(no_commits_message(source, target))

        changed_files = analyzer.file_statistics(target)
        diff = analyzer.diff(target, diff_context_lines)
    except GitError as exc:
        logger.warning("pr_info failed for %s: %s", path, exc)
        return error_record(str(exc) or "Git operation failed")
    except Exception as exc:
        logger.exception("pr_info crashed for %s", path)
        return error_record(f"Unexpected error: {exc}")

    report = ChangeSetReport(
        title=source,
        description=build_description(commits),
        source_branch=source,
        target_branch=target,
        author=commits[0].author_name,
        all_authors=extract_authors(commits),
        commits=commits,
        changed_files=changed_files,
        diff=diff,
    )
    return report.to_dict()
