from __future__ import annotations

import os
from pathlib import Path

import typer

from relver import __version__
from relver.cli.commands.check import check
from relver.cli.commands.inspect_cmd import branch, fetch, options, prefix, version
from relver.cli.commands.update import update
from relver.cli.context import CONFIG_ENV, ROOT_ENV
from relver.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(check)
app.command()(branch)
app.command()(version)
app.command()(prefix)
app.command()(options)
app.command()(fetch)
app.command()(update)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    show_version: bool = typer.Option(False, "--version", help="Show version and exit."),
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Project root holding the git checkout and JSON files (default: cwd)",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: <root>/relver.toml)",
    ),
) -> None:
    if show_version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if root is not None:
        resolved = root.expanduser().resolve()
        if not resolved.is_dir():
            typer.echo(f"error: --root '{resolved}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        os.environ[ROOT_ENV] = str(resolved)

    if config is not None:
        os.environ[CONFIG_ENV] = str(config.expanduser().resolve())


def main() -> None:
    app()
