"""Version keys in JSON files (package.json, manifest.json, ...)."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from relver.core.config import FileTarget
from relver.core.result import Err, Ok, Result
from relver.core.structured import StrDict, as_str_dict
from relver.output.console import ConsoleProtocol
from relver.platform.files import atomic_write_text
from relver.services.release.errors import InferenceError

UPDATER_NAME = "json updater"
DEFAULT_KEYS: tuple[str, ...] = ("version",)


def _invalid(message: str, cause: str | None = None) -> InferenceError:
    return InferenceError(kind="validation_failure", message=message, cause=cause)


def _load(path: Path) -> Result[StrDict, InferenceError]:
    """Read a JSON object; a missing file reads as an empty object."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Ok({})
    except OSError as e:
        return Err(InferenceError(kind="io_failure", message=f"Cannot read {path}", cause=str(e)))

    try:
        data = as_str_dict(json.loads(text))
    except json.JSONDecodeError as e:
        return Err(_invalid(f"Invalid JSON in {path}", cause=str(e)))
    if data is None:
        return Err(_invalid(f"{path} is not a JSON object"))
    return Ok(data)


def get_key(data: StrDict, key: str) -> object | None:
    """Look up a dotted key path ("a.b.c") in nested objects."""
    node: object = data
    for part in key.split("."):
        table = as_str_dict(node)
        if table is None or part not in table:
            return None
        node = table[part]
    return node


def set_key(data: StrDict, key: str, value: object) -> None:
    """Set a dotted key path, creating intermediate objects."""
    parts = key.split(".")
    node = data
    for part in parts[:-1]:
        child = as_str_dict(node.get(part))
        if child is None:
            child = {}
            node[part] = child
        node = child
    node[parts[-1]] = value


def _invalid_keys(keys: Iterable[object]) -> list[object]:
    return [key for key in keys if not isinstance(key, str)]


def update_file(
    target: FileTarget,
    *,
    root: Path,
    console: ConsoleProtocol,
) -> Result[Path, InferenceError]:
    """Rewrite the version keys of one JSON file.

    Every key is read and set again to its current value, then the file is
    saved. Nothing is written when a key is invalid or missing.
    """
    path = root / target.url

    keys: tuple[object, ...] | None = target.keys
    if not keys:
        console.info(f"Keys for file {target.url} not specified. Using default keys instead.")
        keys = DEFAULT_KEYS

    invalid = _invalid_keys(keys)
    if invalid:
        for key in invalid:
            console.warning(f"Key {key!r} is not valid for {UPDATER_NAME}.")
        return Err(
            InferenceError(
                kind="validation_failure",
                message=f"One or more keys are not valid for {UPDATER_NAME}.",
                cause=target.url,
            )
        )

    loaded = _load(path)
    if isinstance(loaded, Err):
        return loaded
    data = loaded.value

    for key in keys:
        assert isinstance(key, str)
        value = get_key(data, key)
        if value is None:
            return Err(
                InferenceError(
                    kind="validation_failure",
                    message=f"Key {key} for file {target.url} was not found.",
                )
            )
        set_key(data, key, value)

    try:
        atomic_write_text(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")
    except OSError as e:
        return Err(InferenceError(kind="io_failure", message=f"Cannot write {path}", cause=str(e)))
    return Ok(path)


def update_files(
    targets: Iterable[FileTarget],
    *,
    root: Path,
    console: ConsoleProtocol,
) -> Result[list[Path], InferenceError]:
    """Update every target in order, stopping at the first failure.

    Files saved before the failure stay saved.
    """
    written: list[Path] = []
    for target in targets:
        result = update_file(target, root=root, console=console)
        if isinstance(result, Err):
            return result
        written.append(result.value)
    return Ok(written)
