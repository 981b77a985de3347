"""In-memory store, for the demo deployment and tests."""

from typing import Callable, Dict, List, Optional

from .base import KeyValueStore


class MemoryStore(KeyValueStore):
    """Dict-backed store.

    State belongs to the instance, so it is neither shared between worker
    processes nor kept across restarts.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def put(self, key: str, value: str, only_if_absent: bool = False) -> bool:
        # No await between check and write, so this is atomic on the event loop
        if only_if_absent and key in self._data:
            return False
        self._data[key] = value
        return True

    async def update(self, key: str, transform: Callable[[str], str]) -> Optional[str]:
        current = self._data.get(key)
        if current is None:
            return None
        self._data[key] = transform(current)
        return self._data[key]

    async def keys(self) -> List[str]:
        return list(self._data)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self._data)
