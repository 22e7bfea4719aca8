# Overview: Keyed in-memory cache for client list queries with per-query stale time.

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Tuple


QueryKey = Tuple[Hashable, ...]

DEFAULT_STALE_TIME = 30.0  # seconds


@dataclass
class _Entry:
    data: Any
    updated_at: float
    stale_time: float


class QueryCache:
    """
    Cache keyed by tuples such as ("claims",) or ("bookings", "pending").

    fetch() serves fresh data from the cache and calls the fetcher
    otherwise. invalidate() drops every key that starts with a prefix.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[QueryKey, _Entry] = {}

    def _is_fresh(self, entry: _Entry) -> bool:
        return self._clock() - entry.updated_at < entry.stale_time

    def fetch(self, key: QueryKey, fetcher: Callable[[], Any], stale_time: float = DEFAULT_STALE_TIME) -> Any:
        entry = self._entries.get(key)
        if entry is not None and self._is_fresh(entry):
            return entry.data

        data = fetcher()
        self._entries[key] = _Entry(data=data, updated_at=self._clock(), stale_time=stale_time)
        return data

    def get_query_data(self, key: QueryKey) -> Any:
        entry = self._entries.get(key)
        return entry.data if entry is not None else None

    def set_query_data(self, key: QueryKey, updater: Any) -> Any:
        """
        Replace cached data. A callable updater receives the current data
        (None when missing) and returns the new value. Freshness is kept.
        """
        entry = self._entries.get(key)
        current = entry.data if entry is not None else None
        data = updater(current) if callable(updater) else updater

        if entry is None:
            self._entries[key] = _Entry(data=data, updated_at=self._clock(), stale_time=DEFAULT_STALE_TIME)
        else:
            entry.data = data
        return data

    def keys(self, prefix: QueryKey = ()) -> list[QueryKey]:
        return [key for key in self._entries if key[:len(prefix)] == prefix]

    def invalidate(self, prefix: QueryKey = ()) -> int:
        stale = self.keys(prefix)
        for key in stale:
            del self._entries[key]
        return len(stale)

    def __contains__(self, key: QueryKey) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
