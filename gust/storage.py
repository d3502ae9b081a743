"""Reading and writing the JSON files that hold project state."""

from __future__ import annotations

import json
import os
from typing import Any

from .errors import ProjectParsingError

_MISSING = object()


def load_json(path: str | os.PathLike[str], default: Any = _MISSING) -> Any:
    """Load JSON from ``path``.

    If the file does not exist, ``default`` is returned when given;
    otherwise :class:`FileNotFoundError` propagates.
    """
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except FileNotFoundError:
        if default is _MISSING:
            raise
        return default
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProjectParsingError(f"invalid JSON in {path}: {exc}") from exc


def save_json(path: str | os.PathLike[str], data: Any) -> None:
    """Write ``data`` to ``path`` as compact JSON, replacing any old content."""
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(data, handle, separators=(",", ":"))