"""Bounded FIFO cache of keyword sets keyed by a cheap document fingerprint.

The fingerprint is intentionally weak: prefix length, full length and the
first character code. Two job descriptions sharing all three collide and the
second lookup returns the first one's keyword set. Speed is preferred over
exactness here, so collisions are expected behaviour rather than a bug.
"""

import logging

from models.schemas.keyword_set import KeywordSet

logger = logging.getLogger(__name__)

CACHE_CAPACITY = 50
FINGERPRINT_PREFIX_CHARS = 500


def fingerprint(text: str) -> str:
    """Collision-prone proxy key: '<prefix len>_<len>_<first char code>'."""
    if not text:
        return "0_0_0"
    return f"{len(text[:FINGERPRINT_PREFIX_CHARS])}_{len(text)}_{ord(text[0])}"


class FingerprintCache:
    """Fingerprint -> KeywordSet with oldest-inserted-first eviction.

    Owned by whoever constructs it (one per pipeline); never a module global.
    """

    def __init__(self, capacity: int = CACHE_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._entries: dict[str, KeywordSet] = {}

    def get(self, key: str) -> KeywordSet | None:
        return self._entries.get(key)

    def put(self, key: str, keywords: KeywordSet) -> None:
        if key in self._entries:
            # Replace in place; insertion position is unchanged
            self._entries[key] = keywords
            return
        if len(self._entries) >= self.capacity:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug("Evicted cached keywords for fingerprint %s", oldest)
        self._entries[key] = keywords

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
