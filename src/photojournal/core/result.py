"""Explicit success/failure values for fail-open boundaries.

Storage operations never raise into the UI. Instead of swallowing errors
ad hoc, they return a ``Result`` and the public convenience methods collapse
it to a default with ``unwrap_or``. Tests (and callers that care) can still
look at ``result.error``.

Usage::

    result = store.load_result()
    if not result.ok:
        logger.warning(f"Starting empty: {result.error}")
    entries = result.unwrap_or([])
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or the error that prevented producing one."""

    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> Result[T]:
        return cls(error=error)

    def unwrap_or(self, default: T) -> T:
        """Return the value, or *default* on failure (or when the value is None)."""
        if self.error is not None or self.value is None:
            return default
        return self.value
