from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

log = logging.getLogger("piecestore")

T = TypeVar("T")


def _now_ms() -> int:
    return time.monotonic_ns() // 1_000_000


@dataclass
class CacheRecord(Generic[T]):
    key: int
    value: T
    timestamp: int  # ms of last insertion or access


class BoundedCache(Generic[T]):
    """
    Fixed-capacity mapping from integer keys to shared payloads.

    Reads refresh a record's timestamp. When an insertion finds the cache
    full, about a third of the records with the oldest timestamps are dropped
    in one pass instead of evicting one record per insertion.

    Values are returned as-is, not copied: payloads are expected to be
    immutable (e.g. `bytes`), so the cache and its callers share one object.
    """

    def __init__(self, max_size: int, clock: Callable[[], int] = _now_ms):
        if int(max_size) <= 0:
            raise ValueError(f"Cache size must be positive, got {max_size}")
        self.max_size = int(max_size)
        self._clock = clock
        self._records: dict[int, CacheRecord[T]] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: int) -> bool:
        return key in self._records

    def keys(self) -> list[int]:
        return list(self._records)

    def put(self, key: int, value: T) -> None:
        if len(self._records) >= self.max_size:
            self._purge()
        # Re-insert so that dict order follows recency for equal timestamps.
        self._records.pop(key, None)
        self._records[key] = CacheRecord(key=key, value=value, timestamp=self._clock())

    def get(self, key: int) -> T | None:
        record = self._records.pop(key, None)
        if record is None:
            return None
        record.timestamp = self._clock()
        self._records[key] = record
        return record.value

    def _purge(self) -> None:
        # At least one record goes, otherwise capacities below 3 never evict.
        n = max(1, len(self._records) // 3)
        oldest = sorted(self._records.values(), key=lambda r: r.timestamp)[:n]
        for record in oldest:
            del self._records[record.key]
        log.debug("Cache purge: evicted %s of %s records (max_size=%s)", n, n + len(self._records), self.max_size)
