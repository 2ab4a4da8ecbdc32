"""Git repository abstraction.

Each method wraps one fixed git command and parses its output. All methods
return Result types; none of them raise on git failures.

Usage:
    repo = Repository(Path.cwd())

    match repo.current_branch():
        case Ok(branch):
            print(f"Branch: {branch}")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from relver.core.result import Err, Ok, Result
from relver.platform.process import ProcessError
from relver.platform.process import run_lines as run_process_lines

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

_REFLOG_DATE_RE = re.compile(r"@\{([0-9]+)\}")

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """Git repository abstraction.

    Attributes:
        path: Path to the repository root (or any directory inside it)
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """Check if this is a valid git repository."""
        return (self.path / ".git").exists()

    def is_diff_empty(self, ref: str | None = None) -> Result[bool, GitError]:
        """Check whether the working tree matches ref (the index if None).

        Runs `git diff --quiet [ref]`: exit 0 means no difference, exit 1
        means there is one. Anything else is an error.
        """
        args = ["diff", "--quiet"]
        if ref is not None:
            args.append(ref)
        match self._run(args):
            case Ok(_):
                return Ok(True)
            case Err(e) if e.returncode == 1:
                return Ok(False)
            case Err(e):
                return Err(self._error(" ".join(args), e, "git diff failed"))

    def current_branch(self) -> Result[str, GitError]:
        """Get the abbreviated name of HEAD."""
        match self._run(["rev-parse", "--abbrev-ref", "HEAD"]):
            case Err(e):
                return Err(self._error("rev-parse --abbrev-ref HEAD", e, "cannot resolve HEAD"))
            case Ok(lines):
                if not lines:
                    return Err(GitError(command="rev-parse", message="empty branch name"))
                return Ok(lines[0].strip())

    def last_merge_parents(self, mainline: str) -> Result[list[str], GitError]:
        """Parent hashes of the most recent first-parent merge on mainline.

        Returns an empty list when mainline has no merge commit.
        """
        args = ["log", "--merges", "--first-parent", mainline, "-n", "1", "--pretty=%P"]
        match self._run(args):
            case Err(e):
                return Err(self._error("log --merges", e, "git log failed"))
            case Ok(lines):
                return Ok(lines[0].split() if lines else [])

    def branches_containing(self, commit: str) -> Result[list[str], GitError]:
        """Local branches that contain commit and are merged into HEAD."""
        args = ["branch", "--contains", commit, "--format=%(refname:short)", "--merged"]
        match self._run(args):
            case Err(e):
                return Err(self._error("branch --contains", e, "git branch failed"))
            case Ok(lines):
                return Ok([line.strip() for line in lines])

    def push_timestamp(self, branch: str) -> Result[int | None, GitError]:
        """Unix timestamp of the newest reflog entry for branch.

        Returns None when the reflog is empty or its selector carries no date.
        """
        args = ["reflog", "show", branch, "--pretty=%gd", "--date=unix", "-n", "1"]
        match self._run(args):
            case Err(e):
                return Err(self._error(f"reflog show {branch}", e, "git reflog failed"))
            case Ok(lines):
                if not lines:
                    return Ok(None)
                m = _REFLOG_DATE_RE.search(lines[0])
                return Ok(int(m.group(1)) if m else None)

    def last_tag(self) -> Result[str | None, GitError]:
        """Name of the most recent tag reachable from HEAD (None if no tag)."""
        match self._run(["describe", "--abbrev=0"]):
            case Err(e) if "No names found" in e.stderr or "No tags" in e.stderr:
                return Ok(None)
            case Err(e):
                return Err(self._error("describe --abbrev=0", e, "git describe failed"))
            case Ok(lines):
                return Ok(lines[0].strip() if lines else None)

    def last_commit_message(self) -> Result[list[str], GitError]:
        """Non-blank lines of the last commit message, subject first."""
        match self._run(["log", "-1", "--pretty=%B"]):
            case Err(e):
                return Err(self._error("log -1", e, "git log failed"))
            case Ok(lines):
                return Ok(lines)

    def fetch(self) -> Result[None, GitError]:
        """Fetch from the default remote."""
        match self._run(["fetch"]):
            case Err(e):
                return Err(self._error("fetch", e, "fetch failed"))
            case Ok(_):
                return Ok(None)

    def _run(self, args: list[str]) -> Result[list[str], ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS
            if command in {"fetch", "pull", "push", "clone"}
            else _GIT_TIMEOUT_SECONDS
        )
        return run_process_lines(
            ["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout
        )

    @staticmethod
    def _error(command: str, e: ProcessError, fallback: str) -> GitError:
        return GitError(
            command=command,
            message=e.stderr.strip() or e.stdout.strip() or fallback,
            returncode=e.returncode,
        )
