from __future__ import annotations

from typing import Any


class ErrorExtractor:
    """Pulls embedded error text out of a decoded response body.

    Each path is a dotted field path (``"error"``, ``"Error.message"``).
    Paths are tried in order and the first non-empty value wins.
    """

    def __init__(self, *paths: str):
        if not paths:
            raise ValueError("at least one field path is required")
        self.paths = tuple(paths)

    def __repr__(self) -> str:
        return f"ErrorExtractor({', '.join(repr(p) for p in self.paths)})"

    def extract(self, data: Any) -> str | None:
        if not isinstance(data, dict):
            return None
        for path in self.paths:
            text = _text(_lookup(data, path))
            if text:
                return text
        return None


def _lookup(data: dict, path: str) -> Any:
    value: Any = data
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, dict):
        # nested {"code": ..., "message": ...}
        return _text(value.get("message"))
    if isinstance(value, str):
        return value.strip() or None
    return str(value) if value else None


DEFAULT_ERROR_EXTRACTOR = ErrorExtractor("error", "Error.message")
