"""Branch and version inference from git history.

Each function answers one question about the repository ("is the tree
clean", "which prefix did the last merge introduce", ...) and returns a
Result carrying an InferenceError on failure. Nothing here exits the
process; the CLI maps errors to exit codes.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Protocol

from relver.core.config import Config
from relver.core.result import Err, Ok, Result
from relver.git.repository import GitError
from relver.output.console import ConsoleProtocol
from relver.services.release import semver
from relver.services.release import subject_options
from relver.services.release.errors import InferenceError
from relver.services.release.subject_options import SubjectOptions

_MAX_PROBE_WORKERS = 8


class GitProbe(Protocol):
    """The subset of Repository used for inference."""

    def is_diff_empty(self, ref: str | None = None) -> Result[bool, GitError]: ...

    def current_branch(self) -> Result[str, GitError]: ...

    def last_merge_parents(self, mainline: str) -> Result[list[str], GitError]: ...

    def branches_containing(self, commit: str) -> Result[list[str], GitError]: ...

    def push_timestamp(self, branch: str) -> Result[int | None, GitError]: ...

    def last_tag(self) -> Result[str | None, GitError]: ...

    def last_commit_message(self) -> Result[list[str], GitError]: ...

    def fetch(self) -> Result[None, GitError]: ...


@dataclass(frozen=True, slots=True)
class BranchCandidate:
    name: str
    date: int


def _git_failure(message: str, error: GitError) -> Err[InferenceError]:
    return Err(InferenceError(kind="git_failure", message=message, cause=error.message))


def check_cleanliness(*, repo: GitProbe) -> Result[bool, InferenceError]:
    """Ok(True) when the working tree has no unstaged changes."""
    match repo.is_diff_empty():
        case Err(e):
            return _git_failure("Could not check directory cleanliness", e)
        case Ok(True):
            return Ok(True)
        case Ok(_):
            return Err(
                InferenceError(
                    kind="not_clean",
                    message="Directory is not clean.",
                    hint="You must commit or discard your changes first.",
                )
            )


def current_branch_name(*, repo: GitProbe) -> Result[str, InferenceError]:
    match repo.current_branch():
        case Err(e):
            return _git_failure("Could not get current branch name", e)
        case Ok(name):
            return Ok(name)


def check_branch_in_config(*, repo: GitProbe, config: Config) -> Result[bool, InferenceError]:
    """Ok(True) if the current branch is a configured release branch.

    A branch outside the config yields a "skipped" error, which is not a
    failure: the caller should stop quietly.
    """
    branch = current_branch_name(repo=repo)
    if isinstance(branch, Err):
        return branch
    if config.allows(branch.value):
        return Ok(True)
    return Err(
        InferenceError(
            kind="skipped",
            message="Current branch is not included in config file",
            hint="Skipping...",
        )
    )


def last_merged_branch_names(
    *,
    repo: GitProbe,
    config: Config,
    commit_hash: str | None = None,
) -> Result[list[str], InferenceError]:
    """Merged branches containing commit_hash.

    Without a hash, the first parent of the last merge commit on the
    mainline is used.
    """
    if commit_hash is None:
        parents = repo.last_merge_parents(config.mainline)
        if isinstance(parents, Err):
            return _git_failure("Could not find last merged branch", parents.error)
        if not parents.value:
            return Err(
                InferenceError(
                    kind="not_found",
                    message="Could not find last merged branch",
                    cause=f"no merge commit on {config.mainline}",
                )
            )
        commit_hash = parents.value[0]

    match repo.branches_containing(commit_hash):
        case Err(e):
            return _git_failure("Could not find last merged branch", e)
        case Ok([]):
            return Err(
                InferenceError(
                    kind="not_found",
                    message="Could not find last merged branch",
                    cause=f"no merged branch contains {commit_hash}",
                )
            )
        case Ok(names):
            return Ok(names)


def _probe_candidate(repo: GitProbe, name: str) -> Result[BranchCandidate | None, InferenceError]:
    clean = repo.is_diff_empty(name)
    if isinstance(clean, Err):
        return _git_failure("Could not get branch diff", clean.error)
    if not clean.value:
        return Ok(None)

    stamp = repo.push_timestamp(name)
    if isinstance(stamp, Err):
        return _git_failure(f"Could not get reflog for branch {name}", stamp.error)
    if stamp.value is None:
        return Err(
            InferenceError(kind="not_found", message=f"Could not get reflog for branch {name}")
        )
    return Ok(BranchCandidate(name=name, date=stamp.value))


def gather_candidates(
    *,
    repo: GitProbe,
    names: list[str],
) -> Result[list[BranchCandidate], InferenceError]:
    """Probe branches in parallel; keep the clean ones, oldest push first.

    The first failing probe (in input order) fails the whole gather.
    """
    if not names:
        return Ok([])

    workers = min(_MAX_PROBE_WORKERS, len(names))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(lambda name: _probe_candidate(repo, name), names))

    candidates: list[BranchCandidate] = []
    for result in results:
        if isinstance(result, Err):
            return result
        if result.value is not None:
            candidates.append(result.value)

    candidates.sort(key=lambda c: c.date)
    return Ok(candidates)


def last_merged_prefix(*, repo: GitProbe, config: Config) -> Result[str, InferenceError]:
    """Release prefix of the branch merged last, e.g. "feature" for "feature/login"."""
    current = current_branch_name(repo=repo)
    if isinstance(current, Err):
        return current

    merged = last_merged_branch_names(repo=repo, config=config)
    if isinstance(merged, Err):
        return merged

    names = [name for name in merged.value if name != current.value]
    candidates = gather_candidates(repo=repo, names=names)
    if isinstance(candidates, Err):
        return candidates
    if not candidates.value:
        return Err(
            InferenceError(
                kind="not_found",
                message="Could not find a suitable merged branch candidate",
            )
        )

    winner = candidates.value[0].name
    prefix, sep, _ = winner.partition("/")
    if not sep:
        return Err(
            InferenceError(
                kind="validation_failure",
                message="Could not extract prefix from last merged branch",
                cause=winner,
            )
        )
    return Ok(prefix)


def last_tag_version(*, repo: GitProbe) -> Result[str, InferenceError]:
    match repo.last_tag():
        case Err(e):
            return _git_failure("Could not get last tag", e)
        case Ok(None):
            return Err(InferenceError(kind="not_found", message="Could not get last tag"))
        case Ok(tag):
            version = semver.clean(tag)
            if version is None:
                return Err(
                    InferenceError(
                        kind="validation_failure",
                        message=f"Last tag is not a valid version: {tag}",
                    )
                )
            return Ok(version)


def _last_commit_lines(repo: GitProbe) -> Result[list[str], InferenceError]:
    match repo.last_commit_message():
        case Err(e):
            return _git_failure("Could not get last commit subject", e)
        case Ok([]):
            return Err(
                InferenceError(kind="not_found", message="Could not get last commit subject")
            )
        case Ok(lines):
            return Ok(lines)


def subject_version(lines: list[str]) -> str | None:
    """Version named by the commit message lines.

    Lines are scanned in reverse and every line overwrites the pick: with
    its cleaned version when valid, with None otherwise. Only the first line
    of the message therefore decides the result.
    """
    version: str | None = None
    for line in reversed(lines):
        cleaned = semver.clean(line)
        version = cleaned if semver.valid(cleaned) else None
    return version


def commit_subject_version(*, repo: GitProbe) -> Result[str | None, InferenceError]:
    """Version named by the last commit message, or None."""
    return _last_commit_lines(repo).map(subject_version)


def commit_subject_options(*, repo: GitProbe) -> Result[SubjectOptions, InferenceError]:
    return _last_commit_lines(repo).map(subject_options.build)


def fetch_remote(*, repo: GitProbe, console: ConsoleProtocol) -> Result[bool, InferenceError]:
    with console.spinner("Fetching branches"):
        fetched = repo.fetch()
    if isinstance(fetched, Err):
        return _git_failure("Could not fetch remote branches", fetched.error)
    return Ok(True)
