"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from relver.core.errors import ErrorCode
from relver.core.result import Err, Result
from relver.output.console import Style
from relver.services.release.errors import InferenceError

if TYPE_CHECKING:
    from relver.cli.context import CLIContext


def error_code(error: InferenceError) -> ErrorCode:
    match error.kind:
        case "skipped":
            return ErrorCode.OK
        case "validation_failure":
            return ErrorCode.VALIDATION_ERROR
        case "io_failure":
            return ErrorCode.IO_ERROR
        case _:
            return ErrorCode.GIT_ERROR


def exit_on_error[T](result: Result[T, InferenceError], ctx: CLIContext) -> T:
    """Return the Ok value, or report the error and exit.

    A skipped run prints its reason and exits with status 0.
    """
    if isinstance(result, Err):
        error = result.error
        if not error.is_fatal:
            ctx.console.info(error.message)
            if error.hint:
                ctx.console.print(error.hint, Style.DIM)
            raise typer.Exit(code=int(ErrorCode.OK))

        ctx.console.error(error.message)
        if error.cause:
            ctx.console.print(f"cause: {error.cause}", Style.DIM)
        if error.hint:
            ctx.console.print(f"hint: {error.hint}", Style.DIM)
        raise typer.Exit(code=int(error_code(error)))
    return result.value
