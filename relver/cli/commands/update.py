"""Update command - rewrite version keys in the configured JSON files."""

from __future__ import annotations

import typer

from relver.cli.commands._helpers import exit_on_error
from relver.cli.context import build_context
from relver.core.errors import ErrorCode
from relver.services.release.inference import check_branch_in_config
from relver.services.release.json_files import update_files


def update(
    any_branch: bool = typer.Option(
        False, "--any-branch", help="Don't skip branches missing from the config"
    ),
) -> None:
    """Rewrite the version keys of every configured JSON file."""
    ctx = build_context(require_config=True)

    if not ctx.config.files:
        ctx.console.error("No files configured")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not any_branch:
        exit_on_error(check_branch_in_config(repo=ctx.repo, config=ctx.config), ctx)

    written = exit_on_error(update_files(ctx.config.files, root=ctx.root, console=ctx.console), ctx)
    for path in written:
        ctx.console.success(str(path.relative_to(ctx.root)))
