"""Exit codes for relver commands.

The numeric values are process exit codes and should remain stable:
- 0: Success, including a skipped run on a branch outside the config
- 1: User error (bad arguments, unreadable config)
- 2: Git error (command failed, dirty tree, nothing found in history)
- 3: Validation error (bad key type, malformed tag, missing prefix)
- 5: I/O error (JSON file unreadable or not writable)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    GIT_ERROR = 2
    VALIDATION_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")
