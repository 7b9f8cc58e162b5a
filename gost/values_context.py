"""A mutable key/value store to carry values through a call chain."""

from __future__ import annotations

from typing import Any, Hashable


class ValuesContext:
    """Holds arbitrary values under hashable keys."""

    def __init__(self) -> None:
        self._values: dict[Hashable, Any] = {}

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the value for ``key``, or ``default`` if it is absent."""
        return self._values.get(key, default)

    def set(self, key: Hashable, value: Any) -> None:
        """Store ``value`` under ``key``."""
        self._values[key] = value

    def delete(self, key: Hashable) -> None:
        """Remove ``key`` if present."""
        self._values.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __repr__(self) -> str:
        return f"ValuesContext({self._values!r})"