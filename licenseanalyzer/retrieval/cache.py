"""Run-scoped memoization of descriptor retrieval.

The same parent POM is typically shared by many unrelated children, so
resolving it once per run saves most of the I/O. Failures are memoized
too, keeping the wrapped retriever referentially stable.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Union

from licenseanalyzer.core.errors import RecoverableError
from licenseanalyzer.core.models import Coordinate, Descriptor
from licenseanalyzer.retrieval.base import DescriptorRetriever

logger = logging.getLogger("licenseanalyzer.retrieval.cache")


class CachingRetriever(DescriptorRetriever):
    """Thread-safe memoizing wrapper around another retriever."""

    NAME = "caching"

    def __init__(self, inner: DescriptorRetriever) -> None:
        self.inner = inner
        self._lock = threading.Lock()
        self._entries: Dict[Coordinate, Union[Descriptor, RecoverableError]] = {}
        self.hits = 0
        self.misses = 0

    def fetch(self, coordinate: Coordinate) -> bytes:
        return self.inner.fetch(coordinate)

    def resolve(self, coordinate: Coordinate) -> Descriptor:
        with self._lock:
            cached = self._entries.get(coordinate)
            if cached is not None:
                self.hits += 1
        if cached is None:
            try:
                cached = self.inner.resolve(coordinate)
            except RecoverableError as exc:
                cached = exc
            with self._lock:
                # Keep the first stored entry if another thread won the race.
                cached = self._entries.setdefault(coordinate, cached)
                self.misses += 1
        else:
            logger.debug("Descriptor cache hit: %s", coordinate)

        if isinstance(cached, RecoverableError):
            raise cached
        return cached

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["CachingRetriever"]
