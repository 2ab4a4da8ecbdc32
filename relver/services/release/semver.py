from __future__ import annotations

import re
from dataclasses import dataclass

_MAX_LENGTH = 256

_NUM = r"0|[1-9]\d*"
_PRE_ID = r"0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*"
_VERSION_RE = re.compile(
    rf"^v?({_NUM})\.({_NUM})\.({_NUM})"
    rf"(?:-((?:{_PRE_ID})(?:\.(?:{_PRE_ID}))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)
_CLEAN_PREFIX_RE = re.compile(r"^[=v]+")


@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    def __str__(self) -> str:
        # Build metadata is not part of the canonical version string.
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        return text


def parse_version(text: str) -> SemVer | None:
    """Strictly parse MAJOR.MINOR.PATCH[-pre][+build], one optional leading v."""
    if len(text) > _MAX_LENGTH:
        return None
    m = _VERSION_RE.match(text)
    if m is None:
        return None
    pre, build = m.group(4), m.group(5)
    return SemVer(
        int(m.group(1)),
        int(m.group(2)),
        int(m.group(3)),
        prerelease=tuple(pre.split(".")) if pre else (),
        build=tuple(build.split(".")) if build else (),
    )


def valid(text: str | None) -> str | None:
    """Canonical version string if text is a valid version, else None."""
    if text is None:
        return None
    parsed = parse_version(text)
    return str(parsed) if parsed is not None else None


def clean(text: str | None) -> str | None:
    """Normalize loose input like ' =v1.2.3 ' to '1.2.3'.

    Returns None when what remains after trimming is not a valid version.
    """
    if text is None:
        return None
    return valid(_CLEAN_PREFIX_RE.sub("", text.strip()))
