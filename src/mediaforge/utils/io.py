"""Output files and settings files.

Tool outputs are written next to their final path and moved into place, so a
reader never sees a half-written subtitle or transcript file.
"""

from __future__ import annotations

import json
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import IO, Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from mediaforge.errors import InvalidInput

_yaml = YAML(typ="safe")


def _replace(path: Path | str, write: Callable[[IO[str]], None]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.stem}_",
        suffix=path.suffix,
        delete=False,
    ) as tmp:
        write(tmp)
    Path(tmp.name).replace(path)
    return path


def write_text(path: Path | str, text: str) -> Path:
    """Atomically write ``text`` (UTF-8) to ``path``."""
    return _replace(path, lambda f: f.write(text))


def write_json(path: Path | str, data: Any) -> Path:
    """Atomically write ``data`` as indented UTF-8 JSON."""
    return _replace(path, lambda f: json.dump(data, f, indent=2, ensure_ascii=False))


def read_yaml(path: Path | str) -> dict:
    """Load a YAML mapping; an empty file is an empty mapping."""
    try:
        with open(path, encoding="utf-8") as f:
            data = _yaml.load(f)
    except YAMLError as e:
        raise InvalidInput(f"Could not parse {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInput(f"{path} must contain a mapping, got {type(data).__name__}")
    return data
