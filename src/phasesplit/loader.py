"""Reading and writing test scripts as YAML or JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from phasesplit._internal.errors import SpecError

if TYPE_CHECKING:
    from phasesplit._internal.types import Script

_YAML_SUFFIXES = (".yml", ".yaml")
_JSON_SUFFIXES = (".json",)


def load_script(file_path: str | Path) -> Script:
    """Load a test script from a YAML or JSON file.

    Args:
        file_path: Path to a ``.yml``, ``.yaml`` or ``.json`` file.

    Returns:
        The parsed script mapping.

    Raises:
        SpecError: If the file does not exist, has an unsupported suffix,
            cannot be parsed, or does not contain a mapping at the top level.
    """
    path = Path(file_path)

    if not path.exists():
        msg = f"Script file not found: {path}"
        raise SpecError(msg)

    suffix = path.suffix.lower()
    if suffix not in _YAML_SUFFIXES + _JSON_SUFFIXES:
        msg = f"Script file must be .yml, .yaml or .json, got: {path}"
        raise SpecError(msg)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Failed to read script file {path}: {exc}"
        raise SpecError(msg) from exc

    try:
        data: Any = yaml.safe_load(text) if suffix in _YAML_SUFFIXES else json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        msg = f"Failed to parse script file {path}: {exc}"
        raise SpecError(msg) from exc

    if not isinstance(data, dict):
        msg = f"Script file {path} must contain a mapping at the top level"
        raise SpecError(msg)
    return data


def dump_script(script: Script, file_path: str | Path) -> Path:
    """Write *script* to *file_path* in the format its suffix names.

    Parent directories are created as needed.

    Args:
        script: Script mapping to write.
        file_path: Destination ending in ``.yml``, ``.yaml`` or ``.json``.

    Returns:
        The path written.

    Raises:
        SpecError: If the suffix is not supported or the file cannot be written.
    """
    path = Path(file_path)
    suffix = path.suffix.lower()

    if suffix in _YAML_SUFFIXES:
        content = yaml.safe_dump(script, sort_keys=False, allow_unicode=True)
    elif suffix in _JSON_SUFFIXES:
        content = json.dumps(script, indent=2, default=str) + "\n"
    else:
        msg = f"Script file must be .yml, .yaml or .json, got: {path}"
        raise SpecError(msg)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        msg = f"Failed to write script file {path}: {exc}"
        raise SpecError(msg) from exc
    return path
