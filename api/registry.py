"""Type registry: maps public type names to dataclass records.

Lets API clients request schemas by name instead of posting sample data.
"""
import threading


class TypeNotFoundError(KeyError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"type {self.name!r} not found in registry"


class Registry:
    """Thread-safe name → record type map."""

    __slots__ = ("_lock", "_types")

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._types: dict[str, type] = {}

    def register(self, name: str, record: type) -> None:
        """Register a record under ``name``, replacing any previous entry."""
        with self._lock:
            self._types[name] = record

    def lookup(self, name: str) -> type:
        with self._lock:
            try:
                return self._types[name]
            except KeyError:
                raise TypeNotFoundError(name) from None

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._types)
