"""Process-wide storage holding one value per type."""

from __future__ import annotations

from typing import Any, TypeVar

T = TypeVar("T")

_STORAGE: dict[type, Any] = {}


def store(data: Any) -> None:
    """Store ``data`` under its type, replacing any earlier value of that type."""
    _STORAGE[type(data)] = data


def get(kind: type[T]) -> T:
    """The stored value of type ``kind``; raises KeyError if there is none."""
    try:
        return _STORAGE[kind]
    except KeyError:
        raise KeyError(f"nothing stored for type {kind.__name__}") from None


def try_get(kind: type[T]) -> T | None:
    """The stored value of type ``kind``, or None if there is none."""
    return _STORAGE.get(kind)


def clear() -> None:
    """Forget every stored value."""
    _STORAGE.clear()