"""In-memory memoization of optimization results.

Lives outside the engine: callers that want repeated identical requests to be
served without recomputation wrap ``optimize_trip`` with this cache.
"""

from __future__ import annotations

import hashlib
import json
import threading
from collections import OrderedDict
from typing import Sequence

from ...models.domain import Coordinates, Location
from .models import OptimizationResult


def cache_key(
    locations: Sequence[Location],
    number_of_days: int,
    start_coordinates: Coordinates | None = None,
) -> str:
    """SHA-256 of the canonical JSON form of the optimization inputs."""

    payload = {
        "locations": [
            [location.id, location.name, location.coordinates.lat, location.coordinates.lng]
            for location in locations
        ],
        "numberOfDays": number_of_days,
        "startCoordinates": (
            [start_coordinates.lat, start_coordinates.lng] if start_coordinates is not None else None
        ),
    }
    encoded = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()


class OptimizationCache:
    """Thread-safe LRU keyed by :func:`cache_key`."""

    def __init__(self, max_entries: int) -> None:
        self.max_entries = max_entries
        self._entries: OrderedDict[str, OptimizationResult] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.max_entries > 0

    def get(self, key: str) -> OptimizationResult | None:
        with self._lock:
            result = self._entries.get(key)
            if result is not None:
                self._entries.move_to_end(key)
            return result

    def set(self, key: str, result: OptimizationResult) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._entries[key] = result
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
