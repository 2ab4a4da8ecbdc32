from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from relver.core.config import DEFAULT_CONFIG_NAME, Config, load_config
from relver.core.errors import ErrorCode
from relver.core.result import Err
from relver.git.repository import Repository
from relver.output.console import ConsoleProtocol, RichConsole

ROOT_ENV = "RELVER_ROOT"
CONFIG_ENV = "RELVER_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: Config
    repo: Repository
    console: ConsoleProtocol


def project_root() -> Path:
    env = os.environ.get(ROOT_ENV)
    if env:
        return Path(env).expanduser().resolve()
    return Path.cwd()


def config_path(root: Path) -> Path:
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env).expanduser().resolve()
    return root / DEFAULT_CONFIG_NAME


def build_context(*, require_config: bool = False) -> CLIContext:
    """Resolve root, config and repository for a command.

    Without require_config a missing config file falls back to defaults; a
    config file that exists but cannot be parsed is always an error.
    """
    root = project_root()
    path = config_path(root)

    config = Config()
    if require_config or path.exists():
        result = load_config(path)
        if isinstance(result, Err):
            typer.echo(f"error: {result.error.message}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        config = result.value

    return CLIContext(
        root=root,
        config=config,
        repo=Repository(root),
        console=RichConsole(),
    )
