"""Shared test fixtures: canned git output, a scripted runner, temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path
from typing import Dict, List, Sequence, Tuple, Union

import pytest

from gitprobe.git.runner import CommandOutput


class ScriptedRunner:
    """Stand-in for CommandRunner that replays canned results and records calls."""

    def __init__(self, responses: Dict[Tuple[str, ...], Union[CommandOutput, Exception]]) -> None:
        self.responses = responses
        self.calls: List[Tuple[str, ...]] = []

    def run(self, cwd, args: Sequence[str]) -> CommandOutput:
        key = tuple(args)
        self.calls.append(key)
        if key not in self.responses:
            raise AssertionError(f"unexpected git call: {key}")
        response = self.responses[key]
        if isinstance(response, Exception):
            raise response
        return response

    def called(self, subcommand: str) -> bool:
        return any(call[0] == subcommand for call in self.calls)


@pytest.fixture
def scripted_runner():
    """Factory: ``scripted_runner({("rev-parse", "--git-dir"): ok(".git")})``."""
    return ScriptedRunner


def ok(stdout: str = "") -> CommandOutput:
    return CommandOutput(stdout=stdout, exit_code=0)


def failed(stdout: str = "", exit_code: int = 1) -> CommandOutput:
    return CommandOutput(stdout=stdout, exit_code=exit_code)


@pytest.fixture
def sample_status_output() -> str:
    """``git status --porcelain=v1`` covering every bucket."""
    return (
        "M  staged_mod.py\n"
        " M unstaged_mod.py\n"
        "MM both.py\n"
        "A  added.py\n"
        " D gone.py\n"
        "R  old.py -> new.py\n"
        "?? new.txt\n"
        "UU conflict.py\n"
        "T  typechange.sh\n"
    )


@pytest.fixture
def sample_log_output() -> str:
    """``git log --format=%H%n%an%n%ae%n%s%n%b%n---COMMIT---`` with two commits."""
    return textwrap.dedent("""\
        2222222bbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb
        Bob
        bob@example.com
        Add blob

        ---COMMIT---
        1111111aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa
        Alice
        alice@example.com
        Add app
        Adds the entry point.

        Second paragraph.

        ---COMMIT---
    """)


@pytest.fixture
def sample_numstat_output() -> str:
    return "3\t5\tsrc/x.txt\n-\t-\tbin/blob\n10\t0\tdocs/readme with spaces.md\n"


def git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True,
    )
    return result.stdout


def commit_as(repo: Path, author: str, *message: str) -> None:
    email = f"{author.lower()}@example.com"
    args = ["-c", f"user.name={author}", "-c", f"user.email={email}", "commit", "-q"]
    for part in message:
        args += ["-m", part]
    git(repo, *args)


def _init_repo(path: Path) -> Path:
    git(path, "init", "-q", "--initial-branch=main")
    git(path, "config", "user.email", "test@test.com")
    git(path, "config", "user.name", "Test")
    git(path, "config", "commit.gpgsign", "false")
    return path


@pytest.fixture
def empty_git_repo(tmp_path: Path) -> Path:
    """A git repository with no commits yet."""
    return _init_repo(tmp_path)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with one commit on ``main``."""
    _init_repo(tmp_path)
    (tmp_path / "README.md").write_text("# Test\n")
    git(tmp_path, "add", ".")
    git(tmp_path, "commit", "-q", "-m", "init")
    return tmp_path


@pytest.fixture
def feature_repo(tmp_git_repo: Path) -> Path:
    """``feature`` branched from ``main`` with two commits by two authors.

    ``main`` gets one more commit after the branch point, which a
    merge-base comparison must not report.
    """
    repo = tmp_git_repo
    git(repo, "checkout", "-q", "-b", "feature")

    (repo / "src").mkdir()
    (repo / "src" / "app.py").write_text("print('hi')\n")
    git(repo, "add", ".")
    commit_as(repo, "Alice", "Add app", "Adds the entry point.")

    (repo / "blob.bin").write_bytes(b"\x00\x01\x02\x00binary")
    with open(repo / "README.md", "a") as f:
        f.write("More docs.\n")
    git(repo, "add", ".")
    commit_as(repo, "Bob", "Add blob")

    git(repo, "checkout", "-q", "main")
    (repo / "other.txt").write_text("main only\n")
    git(repo, "add", ".")
    git(repo, "commit", "-q", "-m", "main only")

    git(repo, "checkout", "-q", "feature")
    return repo
