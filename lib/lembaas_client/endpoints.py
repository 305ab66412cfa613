from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import quote

from .errors import ConfigError
from .extract import ErrorExtractor

METHODS = frozenset({"GET", "POST", "DELETE"})

_FORMATTER = string.Formatter()


@dataclass(frozen=True)
class Endpoint:
    """Declarative description of one REST endpoint."""

    method: str
    path: str
    expected_status: int | tuple[int, ...] = 200
    decode: Callable[[Any], Any] | None = None
    authenticated: bool = True
    lookup: bool = False
    check_error_field: bool = True
    error_extractor: ErrorExtractor | None = None

    def __post_init__(self) -> None:
        if self.method not in METHODS:
            raise ConfigError(f"unsupported method {self.method!r}")
        if not self.path.startswith("/"):
            raise ConfigError(f"endpoint path must start with '/': {self.path!r}")

    @property
    def expected(self) -> tuple[int, ...]:
        return expected_codes(self.expected_status)

    @property
    def params(self) -> tuple[str, ...]:
        return tuple(name for _, name, _, _ in _FORMATTER.parse(self.path) if name)

    def render(self, **params: Any) -> str:
        missing = [name for name in self.params if name not in params]
        if missing:
            raise ConfigError(f"{self.method} {self.path}: missing path parameter(s): {', '.join(missing)}")
        escaped = {name: quote(str(value), safe="") for name, value in params.items()}
        return self.path.format(**escaped)


def expected_codes(value: int | tuple[int, ...]) -> tuple[int, ...]:
    if isinstance(value, int):
        return (value,)
    codes = tuple(int(v) for v in value)
    if not codes:
        raise ConfigError("expected_status must name at least one status code")
    return codes
