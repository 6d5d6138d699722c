# src/socialproof/storage/protocols.py
from __future__ import annotations

from typing import Protocol, runtime_checkable

from socialproof.errors import PersistenceUnavailable


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for the persistent string store holding throttle state.

    Both operations may fail; implementations raise
    ``PersistenceUnavailable`` rather than backend-specific errors.
    """

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key`` or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...


class InMemoryStore:
    """Dictionary-backed store for tests and single-process use."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.get_calls: list[str] = []
        self.set_calls: list[tuple[str, str]] = []

    def get(self, key: str) -> str | None:
        self.get_calls.append(key)
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.set_calls.append((key, value))
        self.data[key] = value

    def reset_call_history(self) -> None:
        """Reset the call history for testing."""
        self.get_calls = []
        self.set_calls = []


class ErrorSimulatingStore(InMemoryStore):
    """Store that can simulate an unavailable backend."""

    def __init__(
        self,
        fail_on_methods: list[str] | None = None,
        initial: dict[str, str] | None = None,
    ) -> None:
        """Initialize with optional methods that should fail.

        Args:
            fail_on_methods: Method names ("get", "set") that should raise
            initial: Starting contents
        """
        super().__init__(initial)
        self.fail_on_methods = fail_on_methods or []

    def get(self, key: str) -> str | None:
        if "get" in self.fail_on_methods:
            raise PersistenceUnavailable("Simulated storage read failure")
        return super().get(key)

    def set(self, key: str, value: str) -> None:
        if "set" in self.fail_on_methods:
            raise PersistenceUnavailable("Simulated storage write failure")
        super().set(key, value)
