"""Render output cache.

Resolution is deterministic, so a rendered tree for the same template
revision and data can be served from memory. Entries are keyed by template
id, template version and the canonical data JSON; evicted least recently used
and expired after an optional TTL.
"""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, NamedTuple

from .hash import hash_fields
from .json import canonical_dumps


@dataclass
class Stats:
    """Cache statistics."""

    size: int = 0
    max_size: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "hit_rate": self.hit_rate,
        }


class _Entry(NamedTuple):
    template_id: str
    output: str
    stored_at: float


def render_key(template_id: str, version: int, data: Any) -> str:
    """Stable key for one template revision rendered against one payload."""
    return hash_fields(template_id, str(version), canonical_dumps(data))


class RenderCache:
    """
    Thread-safe LRU of rendered output strings.

    Examples:
        >>> cache = RenderCache(max_size=100, ttl_seconds=3600)
        >>> cache.put("tpl_1", 1, {"a": 1}, '{"roots":[]}')
        >>> cache.lookup("tpl_1", 1, {"a": 1})
        '{"roots":[]}'
    """

    def __init__(self, max_size: int = 256, ttl_seconds: int | None = None):
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self.max_size = max_size
        self.ttl_seconds = ttl_seconds

        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._stats = Stats(max_size=max_size)
        self._lock = threading.Lock()

    def _expired(self, entry: _Entry) -> bool:
        if self.ttl_seconds is None:
            return False
        return time.monotonic() - entry.stored_at >= self.ttl_seconds

    def _drop(self, key: str) -> None:
        del self._entries[key]
        self._stats.size = len(self._entries)

    def lookup(self, template_id: str, version: int, data: Any) -> str | None:
        """Cached output, or None on a miss or an expired entry."""
        key = render_key(template_id, version, data)

        with self._lock:
            entry = self._entries.get(key)
            if entry is None or self._expired(entry):
                if entry is not None:
                    self._drop(key)
                self._stats.misses += 1
                return None

            self._entries.move_to_end(key)
            self._stats.hits += 1
            return entry.output

    def put(self, template_id: str, version: int, data: Any, output: str) -> None:
        key = render_key(template_id, version, data)

        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = _Entry(template_id, output, time.monotonic())

            if len(self._entries) > self.max_size:
                self._entries.popitem(last=False)
                self._stats.evictions += 1

            self._stats.size = len(self._entries)

    def invalidate(self, template_id: str) -> int:
        """
        Drop every entry rendered from a template.

        Returns:
            Number of entries removed
        """
        with self._lock:
            stale = [key for key, entry in self._entries.items() if entry.template_id == template_id]
            for key in stale:
                del self._entries[key]
            self._stats.size = len(self._entries)
            return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._stats.size = 0

    @property
    def stats(self) -> Stats:
        return self._stats

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


__all__ = ["RenderCache", "Stats", "render_key"]
