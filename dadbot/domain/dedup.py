"""Deduplication of redelivered direct messages."""

import asyncio
from collections import OrderedDict


class DedupStore:
    """Message ids that have already been handled.

    `claim()` is an atomic check-and-set, so two deliveries of the same id
    cannot both be handled even when processed concurrently. With
    `max_entries=0` the store grows without bound; otherwise the oldest ids
    are evicted first.
    """

    def __init__(self, max_entries: int = 0):
        self._max_entries = max(0, max_entries)
        self._seen: "OrderedDict[str, bool]" = OrderedDict()
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, message_id: str) -> bool:
        return message_id in self._seen

    @property
    def max_entries(self) -> int:
        return self._max_entries

    async def claim(self, message_id: str) -> bool:
        """Mark `message_id` as handled. False if it already was."""
        async with self._lock:
            if message_id in self._seen:
                return False
            self._seen[message_id] = True
            if self._max_entries and len(self._seen) > self._max_entries:
                self._seen.popitem(last=False)
            return True

    async def release(self, message_id: str) -> None:
        """Forget a claim whose handling did not complete."""
        async with self._lock:
            self._seen.pop(message_id, None)
