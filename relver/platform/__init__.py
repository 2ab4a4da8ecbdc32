"""Process and filesystem primitives."""

from .files import atomic_write_text
from .process import ProcessError, run, run_lines, split_lines

__all__ = [
    "ProcessError",
    "atomic_write_text",
    "run",
    "run_lines",
    "split_lines",
]
