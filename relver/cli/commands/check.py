"""Check command - verify the repository is ready for a release."""

from __future__ import annotations

import typer

from relver.cli.commands._helpers import exit_on_error
from relver.cli.context import build_context
from relver.services.release.inference import (
    check_branch_in_config,
    check_cleanliness,
    fetch_remote,
)


def check(
    fetch: bool = typer.Option(False, "--fetch", "-f", help="Fetch remote branches first"),
) -> None:
    """Check that the current branch is configured and the tree is clean."""
    ctx = build_context(require_config=True)

    if fetch:
        exit_on_error(fetch_remote(repo=ctx.repo, console=ctx.console), ctx)

    exit_on_error(check_branch_in_config(repo=ctx.repo, config=ctx.config), ctx)
    exit_on_error(check_cleanliness(repo=ctx.repo), ctx)
    ctx.console.success("Ready to release")
