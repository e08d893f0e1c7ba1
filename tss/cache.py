"""Namespaced in-process cache used in front of the relational store.

The cache is a soft mirror: entries live for ``ttl`` seconds at most and a
miss is always resolved by reading the store. Keys are grouped into
namespaces so a whole group can be listed or flushed at once.
"""

import logging
import time
from collections.abc import Callable, Hashable
from typing import Any, Protocol

from fastapi import Request

logger = logging.getLogger(__name__)

TENANTS_NAMESPACE = "tenants"


def settings_namespace(tenant_id: int) -> str:
    """Cache namespace holding one tenant's settings."""
    return f"settings-{tenant_id}"


class CacheBackend(Protocol):
    """Contract the tenant directory and settings store need from a cache."""

    def get(self, key: Hashable, namespace: str) -> Any | None: ...

    def set(self, key: Hashable, value: Any, namespace: str) -> None: ...

    def delete(self, key: Hashable, namespace: str) -> None: ...

    def group(self, namespace: str) -> dict[Hashable, Any]: ...

    def flush(self, namespace: str) -> None: ...


class MemoryCache:
    """Dict-backed cache with per-entry expiry.

    Args:
        ttl: Seconds an entry stays valid. ``None`` keeps entries until they
            are deleted or their namespace is flushed.
        clock: Monotonic time source, replaceable in tests.
    """

    def __init__(
        self,
        ttl: float | None = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._groups: dict[str, dict[Hashable, tuple[float | None, Any]]] = {}
        self._next_sweep = clock()

    def _expired(self, expires_at: float | None) -> bool:
        return expires_at is not None and expires_at <= self._clock()

    def _prune(self, namespace: str) -> dict[Hashable, tuple[float | None, Any]]:
        """Drop expired entries of ``namespace``, and the namespace once empty."""
        entries = self._groups.get(namespace)
        if entries is None:
            return {}
        for key in [k for k, (exp, _) in entries.items() if self._expired(exp)]:
            del entries[key]
        if not entries:
            del self._groups[namespace]
        return entries

    def _sweep(self) -> None:
        # At most one full pass per ttl window.
        if self.ttl is None or self._clock() < self._next_sweep:
            return
        for namespace in list(self._groups):
            self._prune(namespace)
        self._next_sweep = self._clock() + self.ttl

    def get(self, key: Hashable, namespace: str) -> Any | None:
        entries = self._groups.get(namespace)
        if not entries or key not in entries:
            return None
        expires_at, value = entries[key]
        if self._expired(expires_at):
            self._prune(namespace)
            return None
        return value

    def set(self, key: Hashable, value: Any, namespace: str) -> None:
        self._sweep()
        expires_at = None if self.ttl is None else self._clock() + self.ttl
        self._groups.setdefault(namespace, {})[key] = (expires_at, value)

    def delete(self, key: Hashable, namespace: str) -> None:
        entries = self._groups.get(namespace)
        if entries is None:
            return
        entries.pop(key, None)
        if not entries:
            del self._groups[namespace]

    def group(self, namespace: str) -> dict[Hashable, Any]:
        """Return a snapshot of every live entry in ``namespace``."""
        return {key: value for key, (_, value) in self._prune(namespace).items()}

    def namespaces(self) -> list[str]:
        """Namespaces currently holding entries, expired or not."""
        return list(self._groups)

    def flush(self, namespace: str) -> None:
        if self._groups.pop(namespace, None) is not None:
            logger.debug("Flushed cache namespace %s", namespace)


def get_cache(request: Request) -> CacheBackend:
    """Dependency returning the application's shared cache."""
    return request.app.state.cache
