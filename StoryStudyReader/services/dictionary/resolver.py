"""Definition cache and resolver.

The resolver answers "what does this word mean" for a surface form. It looks
in the session cache first and only calls the lookup backend on a miss. A
failing backend never raises to the caller: the `UNAVAILABLE` placeholder is
returned instead, and it is cached only when `cache_failures` is set.

Two entry points share the same policy:
  - `await resolve(word)` for callers running a coroutine;
  - `peek(word)` + `settle(word, result, error)` for the Qt worker path, where
    the blocking lookup runs in a QThread and the result is handed back on the
    GUI thread.

In-flight lookups are not de-duplicated; when two resolutions of the same word
race, the last one to settle wins the cache slot.
"""
from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, Optional

from StoryStudyReader.core.models import Definition, UNAVAILABLE

logger = logging.getLogger(__name__)

LookupFn = Callable[[str], Any]


class DefinitionCache:
    """Session-lifetime surface form -> Definition map. Never evicts."""

    def __init__(self) -> None:
        self._entries: Dict[str, Definition] = {}

    def get(self, word: str) -> Optional[Definition]:
        return self._entries.get(word)

    def put(self, word: str, definition: Definition) -> None:
        self._entries[word] = definition

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, word: str) -> bool:
        return word in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def _coerce(result: Any) -> Definition:
    if isinstance(result, Definition):
        return result
    if isinstance(result, dict):
        d = Definition.from_dict(result)
        if d.reading or d.meaning:
            return d
    raise ValueError(f"Unusable lookup result: {result!r}")


def _is_async(fn: Any) -> bool:
    # Covers plain coroutine functions and objects with `async def __call__`.
    return inspect.iscoroutinefunction(fn) or inspect.iscoroutinefunction(getattr(fn, '__call__', None))


class DefinitionResolver:
    def __init__(self, lookup_fn: LookupFn, cache: Optional[DefinitionCache] = None, cache_failures: bool = False):
        self.lookup_fn = lookup_fn
        self.cache = cache if cache is not None else DefinitionCache()
        self.cache_failures = cache_failures

    def peek(self, word: str) -> Optional[Definition]:
        hit = self.cache.get(word)
        if hit is not None:
            logger.debug("Definition cache hit for %r", word)
        return hit

    def settle(self, word: str, result: Any = None, error: Optional[BaseException | str] = None) -> Definition:
        """Record the outcome of a lookup for `word` and return what to display."""
        if error is None:
            try:
                definition = _coerce(result)
            except ValueError as e:
                error = e
            else:
                self.cache.put(word, definition)
                logger.info("Fetched definition for %r", word)
                return definition
        logger.warning("Failed to get definition for %r: %s", word, error)
        if self.cache_failures:
            self.cache.put(word, UNAVAILABLE)
        return UNAVAILABLE

    async def resolve(self, word: str) -> Definition:
        hit = self.peek(word)
        if hit is not None:
            return hit
        try:
            if _is_async(self.lookup_fn):
                result = await self.lookup_fn(word)
            else:
                result = await asyncio.to_thread(self.lookup_fn, word)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            return self.settle(word, error=e)
        return self.settle(word, result)
