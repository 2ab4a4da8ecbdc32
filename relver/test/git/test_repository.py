"""Tests for git/repository.py."""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from relver.core.result import Err, Ok
from relver.git.repository import GitError, Repository


def make_completed_process(
    stdout: str = "",
    stderr: str = "",
    returncode: int = 0,
) -> subprocess.CompletedProcess[str]:
    """Create a mock CompletedProcess."""
    return subprocess.CompletedProcess(
        args=["git"],
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
    )


def git_args(mock_run: MagicMock) -> list[str]:
    """Arguments after `git -C <path>` of the last call."""
    cmd = mock_run.call_args[0][0]
    assert cmd[:2] == ["git", "-C"]
    return cmd[3:]


# =============================================================================
# Repository Tests - Mocked subprocess
# =============================================================================


class TestRepositoryMocked:
    """Tests for Repository with subprocess.run patched."""

    def test_exists(self, tmp_path: Path) -> None:
        assert Repository(tmp_path).exists() is False
        (tmp_path / ".git").mkdir()
        assert Repository(tmp_path).exists() is True

    @patch("subprocess.run")
    def test_diff_empty(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()

        assert Repository(tmp_path).is_diff_empty() == Ok(True)
        assert git_args(mock_run) == ["diff", "--quiet"]

    @patch("subprocess.run")
    def test_diff_not_empty(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(returncode=1)

        assert Repository(tmp_path).is_diff_empty("feature/a") == Ok(False)
        assert git_args(mock_run) == ["diff", "--quiet", "feature/a"]

    @patch("subprocess.run")
    def test_diff_error(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stderr="fatal: bad revision 'nope'\n", returncode=128
        )

        result = Repository(tmp_path).is_diff_empty("nope")

        assert isinstance(result, Err)
        assert result.error.message == "fatal: bad revision 'nope'"
        assert result.error.returncode == 128

    @patch("subprocess.run")
    def test_current_branch(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="develop\n")

        assert Repository(tmp_path).current_branch() == Ok("develop")
        assert git_args(mock_run) == ["rev-parse", "--abbrev-ref", "HEAD"]

    @patch("subprocess.run")
    def test_current_branch_error(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stderr="fatal: not a git repository", returncode=128
        )

        result = Repository(tmp_path).current_branch()

        assert isinstance(result, Err)
        assert "not a git repository" in result.error.message

    @patch("subprocess.run")
    def test_last_merge_parents(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="aaa111 bbb222\n")

        result = Repository(tmp_path).last_merge_parents("master")

        assert result == Ok(["aaa111", "bbb222"])
        assert git_args(mock_run) == [
            "log",
            "--merges",
            "--first-parent",
            "master",
            "-n",
            "1",
            "--pretty=%P",
        ]

    @patch("subprocess.run")
    def test_last_merge_parents_none(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="")
        assert Repository(tmp_path).last_merge_parents("master") == Ok([])

    @patch("subprocess.run")
    def test_branches_containing(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="master\nfeature/login\n")

        result = Repository(tmp_path).branches_containing("aaa111")

        assert result == Ok(["master", "feature/login"])
        assert git_args(mock_run) == [
            "branch",
            "--contains",
            "aaa111",
            "--format=%(refname:short)",
            "--merged",
        ]

    @patch("subprocess.run")
    def test_push_timestamp(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="feature/login@{1700000000}\n")

        assert Repository(tmp_path).push_timestamp("feature/login") == Ok(1700000000)

    @patch("subprocess.run")
    def test_push_timestamp_without_date(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="feature/login@{now}\n")
        assert Repository(tmp_path).push_timestamp("feature/login") == Ok(None)

        mock_run.return_value = make_completed_process(stdout="")
        assert Repository(tmp_path).push_timestamp("feature/login") == Ok(None)

    @patch("subprocess.run")
    def test_last_tag(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="v1.4.0\n")
        assert Repository(tmp_path).last_tag() == Ok("v1.4.0")

    @patch("subprocess.run")
    def test_last_tag_none(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            stderr="fatal: No names found, cannot describe anything.\n", returncode=128
        )
        assert Repository(tmp_path).last_tag() == Ok(None)

    @patch("subprocess.run")
    def test_last_commit_message(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="1.2.3\n\nbody line\n\n")
        assert Repository(tmp_path).last_commit_message() == Ok(["1.2.3", "body line"])

    @patch("subprocess.run")
    def test_fetch_error(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stderr="fatal: no remote", returncode=1)

        result = Repository(tmp_path).fetch()

        assert result == Err(GitError(command="fetch", message="fatal: no remote", returncode=1))

    @patch("subprocess.run")
    def test_fetch_uses_network_timeout(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()

        Repository(tmp_path).fetch()
        fetch_timeout = mock_run.call_args.kwargs["timeout"]
        Repository(tmp_path).current_branch()
        local_timeout = mock_run.call_args.kwargs["timeout"]

        assert fetch_timeout > local_timeout


# =============================================================================
# Repository Tests - Real git
# =============================================================================

_GIT_ENV = {
    "GIT_AUTHOR_NAME": "Test",
    "GIT_AUTHOR_EMAIL": "test@example.com",
    "GIT_COMMITTER_NAME": "Test",
    "GIT_COMMITTER_EMAIL": "test@example.com",
    "GIT_CONFIG_NOSYSTEM": "1",
}


def _git(repo: Path, *args: str) -> str:
    proc = subprocess.run(
        ["git", *args],
        cwd=repo,
        env={**os.environ, **_GIT_ENV},
        capture_output=True,
        text=True,
        check=True,
    )
    return proc.stdout


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    _git(tmp_path, "init", "-q", "-b", "master")
    (tmp_path / "README.md").write_text("hello\n", encoding="utf-8")
    _git(tmp_path, "add", "README.md")
    _git(tmp_path, "commit", "-q", "-m", "initial")
    return tmp_path


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestRepositoryGit:
    """Tests against a throwaway git repository."""

    def test_clean_then_dirty(self, git_repo: Path) -> None:
        repo = Repository(git_repo)
        assert repo.is_diff_empty() == Ok(True)

        (git_repo / "untracked.txt").write_text("x", encoding="utf-8")
        assert repo.is_diff_empty() == Ok(True)

        (git_repo / "README.md").write_text("changed\n", encoding="utf-8")
        assert repo.is_diff_empty() == Ok(False)

    def test_current_branch(self, git_repo: Path) -> None:
        assert Repository(git_repo).current_branch() == Ok("master")

    def test_last_tag(self, git_repo: Path) -> None:
        repo = Repository(git_repo)
        assert repo.last_tag() == Ok(None)

        _git(git_repo, "tag", "-a", "v1.2.0", "-m", "release 1.2.0")
        assert repo.last_tag() == Ok("v1.2.0")

    def test_last_commit_message(self, git_repo: Path) -> None:
        (git_repo / "a.txt").write_text("a", encoding="utf-8")
        _git(git_repo, "add", "a.txt")
        _git(git_repo, "commit", "-q", "-m", "2.0.0", "-m", "release notes")

        assert Repository(git_repo).last_commit_message() == Ok(["2.0.0", "release notes"])

    def test_merge_history(self, git_repo: Path) -> None:
        _git(git_repo, "checkout", "-q", "-b", "feature/login")
        (git_repo / "login.txt").write_text("login", encoding="utf-8")
        _git(git_repo, "add", "login.txt")
        _git(git_repo, "commit", "-q", "-m", "add login")
        _git(git_repo, "checkout", "-q", "master")
        _git(git_repo, "merge", "-q", "--no-ff", "feature/login", "-m", "merge login")

        repo = Repository(git_repo)
        parents = repo.last_merge_parents("master")
        assert isinstance(parents, Ok)
        assert len(parents.value) == 2

        branches = repo.branches_containing(parents.value[0])
        assert isinstance(branches, Ok)
        assert set(branches.value) == {"master", "feature/login"}

        assert repo.is_diff_empty("feature/login") == Ok(True)

        stamp = repo.push_timestamp("feature/login")
        assert isinstance(stamp, Ok)
        assert isinstance(stamp.value, int)
        assert stamp.value > 0
