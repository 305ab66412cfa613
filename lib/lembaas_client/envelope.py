from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Envelope(Generic[T]):
    """Decoded response of a single call: typed payload plus error text."""

    payload: T | None
    error_message: str | None
    status_code: int

    @property
    def ok(self) -> bool:
        return not self.error_message
