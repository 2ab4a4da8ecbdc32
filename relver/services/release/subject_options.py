"""Options embedded in a commit message.

A commit can steer a release with tokens anywhere in its message:

    chore: release 2.1.0 --prerelease=beta --skip-changelog

`--name` is a bare flag (True); `--name=value` carries a string. A later
token with the same name wins.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

_OPTION_RE = re.compile(r"(?<!\S)--([A-Za-z0-9][A-Za-z0-9_-]*)(?:=(\S+))?")

OptionValue = str | bool


@dataclass(frozen=True, slots=True)
class SubjectOptions:
    options: Mapping[str, OptionValue] = field(default_factory=dict)
    lines: tuple[str, ...] = ()

    def get(self, name: str, default: OptionValue | None = None) -> OptionValue | None:
        return self.options.get(name.lower(), default)

    def flag(self, name: str) -> bool:
        """True if the option is present with a truthy value."""
        return bool(self.options.get(name.lower(), False))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self.options


def build(lines: Iterable[str]) -> SubjectOptions:
    """Parse commit message lines into SubjectOptions."""
    kept = tuple(lines)
    options: dict[str, OptionValue] = {}
    for line in kept:
        for m in _OPTION_RE.finditer(line):
            name, value = m.group(1).lower(), m.group(2)
            options[name] = value if value is not None else True
    return SubjectOptions(options=options, lines=kept)
