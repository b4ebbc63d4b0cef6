"""Tests for branch comparison and log / numstat parsing."""

from pathlib import Path

import pytest

from conftest import failed, git, ok
from gitprobe.git.analyzer import (
    DETAILS_HEADING,
    LOG_FORMAT,
    NO_COMMITS_DESCRIPTION,
    SUMMARY_HEADING,
    ChangeSetAnalyzer,
    build_description,
    extract_authors,
    parse_commit_log,
    parse_numstat,
    parse_numstat_line,
    validate_distinct,
)
from gitprobe.git.errors import (
    DetachedHead,
    ExecutionError,
    NoDefaultBranch,
    SameBranch,
    TargetBranchNotFound,
)
from gitprobe.git.models import CommitRecord, FileStat


def _commit(sha: str, author: str, subject: str, body: str = "") -> CommitRecord:
    return CommitRecord(sha, author, f"{author.lower()}@example.com", subject, body)


class TestParseCommitLog:
    def test_two_commits(self, sample_log_output: str):
        commits = parse_commit_log(sample_log_output)
        assert [c.subject for c in commits] == ["Add blob", "Add app"]
        newest, oldest = commits
        assert newest.hash == "2222222bbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb"
        assert newest.author_name == "Bob"
        assert newest.author_email == "bob@example.com"
        assert newest.body == ""
        assert oldest.body == "Adds the entry point.\n\nSecond paragraph."

    def test_malformed_block_discarded(self):
        output = "abc\nAlice\n---COMMIT---\nfff\nBob\nbob@x\nFix\n---COMMIT---\n"
        commits = parse_commit_log(output)
        assert len(commits) == 1
        assert commits[0].subject == "Fix"

    def test_empty(self):
        assert parse_commit_log("") == []
        assert parse_commit_log("\n---COMMIT---\n") == []


class TestParseNumstat:
    def test_counts(self):
        assert parse_numstat_line("3\t5\tsrc/x.txt") == FileStat("src/x.txt", 3, 5)

    def test_binary_is_zero(self):
        assert parse_numstat_line("-\t-\tbin/blob") == FileStat("bin/blob", 0, 0)

    def test_short_line_ignored(self):
        assert parse_numstat_line("3\t5") is None

    def test_path_with_tab_kept_whole(self):
        assert parse_numstat_line("1\t2\ta\tb") == FileStat("a\tb", 1, 2)

    def test_full_output(self, sample_numstat_output: str):
        assert parse_numstat(sample_numstat_output) == [
            FileStat("src/x.txt", 3, 5),
            FileStat("bin/blob", 0, 0),
            FileStat("docs/readme with spaces.md", 10, 0),
        ]


class TestBuildDescription:
    def test_no_commits(self):
        assert build_description([]) == NO_COMMITS_DESCRIPTION

    def test_sections_oldest_first(self):
        commits = [
            _commit("cccccccccc", "Carol", "Third", "Third body"),
            _commit("bbbbbbbbbb", "Bob", "Second"),
            _commit("aaaaaaaaaa", "Alice", "First", "First body"),
        ]
        text = build_description(commits)

        summary, details = text.split(DETAILS_HEADING)
        assert summary.startswith(SUMMARY_HEADING)
        assert summary.index("- [aaaaaaa] First (Alice)") < summary.index("- [bbbbbbb] Second (Bob)")
        assert summary.index("- [bbbbbbb] Second (Bob)") < summary.index("- [ccccccc] Third (Carol)")
        assert details.index("### [aaaaaaa] First") < details.index("### [ccccccc] Third")
        assert "### [aaaaaaa] First\nFirst body" in details
        assert "### [bbbbbbb] Second\n\n### [ccccccc] Third" in details

    def test_exact_layout(self):
        text = build_description([_commit("abc123def456", "Test Author", "Test commit", "Body")])
        assert text == (
            "## Commits in this PR\n"
            "\n"
            "- [abc123d] Test commit (Test Author)\n"
            "\n"
            "## Commit details\n"
            "\n"
            "### [abc123d] Test commit\n"
            "Body"
        )

    def test_blank_body_omitted(self):
        text = build_description([_commit("abc123def456", "A", "Subject", "   ")])
        assert text.endswith("### [abc123d] Subject")


class TestAuthorsAndDistinct:
    def test_extract_authors_sorted_unique(self):
        commits = [_commit("1", "A", "x"), _commit("2", "B", "y"), _commit("3", "A", "z")]
        assert extract_authors(commits) == ["A", "B"]

    def test_extract_authors_empty(self):
        assert extract_authors([]) == []

    @pytest.mark.parametrize("branch", ["main", "master", "feature/x", ""])
    def test_same_branch_fails(self, branch: str):
        with pytest.raises(SameBranch):
            validate_distinct(branch, branch)

    def test_distinct_branches_pass(self):
        validate_distinct("feature", "main")


class TestDetectTargetBranch:
    @pytest.mark.parametrize(
        "listing, expected",
        [
            ("* main\n  master\n", "main"),
            ("  master\n* main\n", "main"),
            ("  main\n", "main"),
            ("* master\n", "master"),
            ("+ master\n", "master"),
        ],
    )
    def test_preference(self, tmp_path: Path, scripted_runner, listing: str, expected: str):
        runner = scripted_runner({("branch", "--list", "main", "master"): ok(listing)})
        assert ChangeSetAnalyzer(tmp_path, runner).detect_target_branch() == expected

    def test_neither(self, tmp_path: Path, scripted_runner):
        runner = scripted_runner({("branch", "--list", "main", "master"): ok("")})
        with pytest.raises(NoDefaultBranch, match="target_branch"):
            ChangeSetAnalyzer(tmp_path, runner).detect_target_branch()

    def test_listing_failure(self, tmp_path: Path, scripted_runner):
        runner = scripted_runner({("branch", "--list", "main", "master"): failed()})
        with pytest.raises(ExecutionError):
            ChangeSetAnalyzer(tmp_path, runner).detect_target_branch()

    def test_real_repo(self, feature_repo: Path):
        assert ChangeSetAnalyzer(feature_repo).detect_target_branch() == "main"

    def test_real_repo_master(self, tmp_git_repo: Path):
        git(tmp_git_repo, "branch", "-q", "-m", "main", "master")
        git(tmp_git_repo, "checkout", "-q", "-b", "topic")
        assert ChangeSetAnalyzer(tmp_git_repo).detect_target_branch() == "master"


class TestResolveTarget:
    def test_explicit_existing(self, feature_repo: Path):
        assert ChangeSetAnalyzer(feature_repo).resolve_target_branch("main") == "main"

    def test_explicit_missing(self, feature_repo: Path):
        with pytest.raises(TargetBranchNotFound, match="develop"):
            ChangeSetAnalyzer(feature_repo).resolve_target_branch("develop")

    def test_auto(self, feature_repo: Path):
        assert ChangeSetAnalyzer(feature_repo).resolve_target_branch(None) == "main"


class TestCurrentBranch:
    def test_branch(self, feature_repo: Path):
        assert ChangeSetAnalyzer(feature_repo).current_branch() == "feature"

    def test_detached(self, feature_repo: Path):
        git(feature_repo, "checkout", "-q", "--detach")
        with pytest.raises(DetachedHead):
            ChangeSetAnalyzer(feature_repo).current_branch()


class TestRangeQueries:
    def test_commit_log_newest_first(self, feature_repo: Path):
        commits = ChangeSetAnalyzer(feature_repo).commit_log("main")
        assert [c.subject for c in commits] == ["Add blob", "Add app"]
        assert [c.author_name for c in commits] == ["Bob", "Alice"]
        assert commits[1].body == "Adds the entry point."
        assert all(len(c.hash) == 40 for c in commits)

    def test_commit_log_empty_range(self, tmp_git_repo: Path):
        git(tmp_git_repo, "checkout", "-q", "-b", "feature")
        assert ChangeSetAnalyzer(tmp_git_repo).commit_log("main") == []

    def test_commit_log_uses_format(self, tmp_path: Path, scripted_runner, sample_log_output: str):
        runner = scripted_runner({
            ("log", "main..HEAD", f"--format={LOG_FORMAT}", "--no-color"): ok(sample_log_output),
        })
        assert len(ChangeSetAnalyzer(tmp_path, runner).commit_log("main")) == 2

    def test_file_statistics_against_merge_base(self, feature_repo: Path):
        stats = ChangeSetAnalyzer(feature_repo).file_statistics("main")
        assert stats == [
            FileStat("README.md", 1, 0),
            FileStat("blob.bin", 0, 0),
            FileStat("src/app.py", 1, 0),
        ]

    def test_file_statistics_failure(self, tmp_path: Path, scripted_runner):
        runner = scripted_runner({("diff", "--numstat", "--no-color", "main...HEAD"): failed()})
        with pytest.raises(ExecutionError, match="file statistics"):
            ChangeSetAnalyzer(tmp_path, runner).file_statistics("main")

    def test_diff_excludes_target_only_changes(self, feature_repo: Path):
        diff = ChangeSetAnalyzer(feature_repo).diff("main", 3)
        assert "diff --git a/src/app.py b/src/app.py" in diff
        assert "other.txt" not in diff

    def test_diff_failure_is_empty(self, tmp_path: Path, scripted_runner):
        runner = scripted_runner({("diff", "main...HEAD", "-U5", "--no-color"): failed()})
        assert ChangeSetAnalyzer(tmp_path, runner).diff("main", 5) == ""
