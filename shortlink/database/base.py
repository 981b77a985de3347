"""Abstract base class for key-value store implementations."""

from abc import ABC, abstractmethod
from typing import Callable, Optional, List


class KeyValueStore(ABC):
    """Key-value persistence used by the shortener.

    Each short link lives under exactly one key: ``put`` creates it and
    ``update`` rewrites it in place. Both must be atomic per key.
    """

    async def connect(self) -> None:
        """Open connections (no-op unless the backend needs one)."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Get the value stored under a key.

        Args:
            key: The key to lookup

        Returns:
            The stored value, or None if absent
        """
        pass

    @abstractmethod
    async def put(self, key: str, value: str, only_if_absent: bool = False) -> bool:
        """Store a value under a key.

        Args:
            key: The key to write
            value: The value to store
            only_if_absent: Refuse to overwrite an existing key

        Returns:
            True if written, False if only_if_absent was set and the key exists
        """
        pass

    @abstractmethod
    async def update(self, key: str, transform: Callable[[str], str]) -> Optional[str]:
        """Atomically replace the value under a key with ``transform(value)``.

        Concurrent updates of the same key must not overwrite each other.

        Args:
            key: The key to rewrite
            transform: Maps the current value to the new one

        Returns:
            The new value, or None if the key is absent (nothing is written)
        """
        pass

    @abstractmethod
    async def keys(self) -> List[str]:
        """List every stored key.

        Returns:
            List of keys
        """
        pass

    async def exists(self, key: str) -> bool:
        """Check if a key is present."""
        return await self.get(key) is not None

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close store connections."""
        pass
