"""Storage package - persistence backends for throttle state."""

from socialproof.storage.json_file import JsonFileStore
from socialproof.storage.protocols import ErrorSimulatingStore, InMemoryStore, KeyValueStore

__all__ = ["ErrorSimulatingStore", "InMemoryStore", "JsonFileStore", "KeyValueStore"]
