"""Read-only questions about git history."""

from __future__ import annotations

import typer

from relver.cli.commands._helpers import exit_on_error
from relver.cli.context import build_context
from relver.core.errors import ErrorCode
from relver.output.console import Style
from relver.services.release.inference import (
    commit_subject_options,
    commit_subject_version,
    current_branch_name,
    fetch_remote,
    last_merged_prefix,
    last_tag_version,
)


def branch() -> None:
    """Print the current branch name."""
    ctx = build_context()
    ctx.console.print(exit_on_error(current_branch_name(repo=ctx.repo), ctx))


def version(
    source: str = typer.Option("tag", "--from", help="Where to read the version: tag or commit"),
) -> None:
    """Print the version implied by the last tag or the last commit message."""
    ctx = build_context()
    match source:
        case "tag":
            ctx.console.print(exit_on_error(last_tag_version(repo=ctx.repo), ctx))
        case "commit":
            found = exit_on_error(commit_subject_version(repo=ctx.repo), ctx)
            if found is None:
                ctx.console.print("No version in last commit message", Style.DIM)
                raise typer.Exit(code=int(ErrorCode.GIT_ERROR))
            ctx.console.print(found)
        case _:
            ctx.console.error(f"unknown version source: {source}")
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))


def prefix() -> None:
    """Print the release prefix of the last merged branch."""
    ctx = build_context()
    ctx.console.print(exit_on_error(last_merged_prefix(repo=ctx.repo, config=ctx.config), ctx))


def options() -> None:
    """Print the options found in the last commit message."""
    ctx = build_context()
    parsed = exit_on_error(commit_subject_options(repo=ctx.repo), ctx)
    if not parsed.options:
        ctx.console.print("No options in last commit message", Style.DIM)
        return
    for name, value in sorted(parsed.options.items()):
        ctx.console.print(f"{name}={value}" if value is not True else name)


def fetch() -> None:
    """Fetch remote branches."""
    ctx = build_context()
    exit_on_error(fetch_remote(repo=ctx.repo, console=ctx.console), ctx)
    ctx.console.success("Fetched remote branches")
