from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

InferenceErrorKind = Literal[
    "not_clean",
    "git_failure",
    "validation_failure",
    "not_found",
    "skipped",
    "io_failure",
]


@dataclass(frozen=True, slots=True)
class InferenceError:
    kind: InferenceErrorKind
    message: str
    cause: str | None = None
    hint: str | None = None

    @property
    def is_fatal(self) -> bool:
        """False only for a skipped run, which ends the process successfully."""
        return self.kind != "skipped"
