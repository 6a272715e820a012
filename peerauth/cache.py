"""
peerauth.cache
~~~~~~~~~~~~~~
Memoizing wrapper around an :class:`~peerauth.auth.Authenticator`.

Results are cached per exact ``Credentials`` value, bounded by a
``CacheSpec`` such as ``maximumSize=1000,expireAfterWrite=10m``.
Concurrent lookups of the same key share one in-flight verification;
lookups of different keys never wait on each other.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Set

from .auth import Authenticator
from .errors import ConfigurationError
from .logger import AuthLogger
from .model import Credentials, Faulted, Rejected, VerificationResult

_UNITS = {"d": 86400, "h": 3600, "m": 60, "s": 1}


def _parse_duration(key: str, raw: str) -> float:
    raw = raw.strip().lower()
    if len(raw) < 2 or raw[-1] not in _UNITS or not raw[:-1].isdigit():
        raise ConfigurationError(
            f"{key}={raw!r}: expected an integer followed by one of d, h, m, s"
        )
    return float(int(raw[:-1]) * _UNITS[raw[-1]])


@dataclass(frozen=True)
class CacheSpec:
    maximum_size: Optional[int] = None
    expire_after_write: Optional[float] = None
    expire_after_access: Optional[float] = None

    @classmethod
    def parse(cls, text: str) -> "CacheSpec":
        """Parse ``maximumSize=N,expireAfterWrite=10m,expireAfterAccess=30s``."""
        values: Dict[str, object] = {}
        for part in filter(None, (p.strip() for p in (text or "").split(","))):
            key, sep, raw = part.partition("=")
            key = key.strip()
            if not sep:
                raise ConfigurationError(f"Cache spec entry {part!r} is not key=value")
            if key in values:
                raise ConfigurationError(f"Cache spec repeats {key!r}")

            if key == "maximumSize":
                raw = raw.strip()
                if not raw.isdigit():
                    raise ConfigurationError(f"maximumSize={raw!r}: expected an integer >= 0")
                values[key] = int(raw)
            elif key in ("expireAfterWrite", "expireAfterAccess"):
                values[key] = _parse_duration(key, raw)
            else:
                raise ConfigurationError(f"Unknown cache spec key {key!r}")

        if not values:
            raise ConfigurationError(
                "Cache spec needs at least one of maximumSize, "
                "expireAfterWrite, expireAfterAccess"
            )
        return cls(
            maximum_size=values.get("maximumSize"),  # type: ignore[arg-type]
            expire_after_write=values.get("expireAfterWrite"),  # type: ignore[arg-type]
            expire_after_access=values.get("expireAfterAccess"),  # type: ignore[arg-type]
        )


@dataclass(frozen=True)
class CacheStats:
    hits: int = 0
    misses: int = 0
    loads: int = 0
    coalesced: int = 0
    evictions: int = 0


class _Entry:
    __slots__ = ("result", "written_at", "accessed_at")

    def __init__(self, result: VerificationResult, now: float) -> None:
        self.result = result
        self.written_at = now
        self.accessed_at = now


class CachingAuthenticator:
    def __init__(
        self,
        delegate: Authenticator,
        spec: CacheSpec,
        cache_rejections: bool = True,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[AuthLogger] = None,
    ) -> None:
        self.delegate = delegate
        self.spec = spec
        self.cache_rejections = cache_rejections
        self._clock = clock
        self.logger = logger or AuthLogger()

        self._lock = threading.Lock()
        self._entries: "OrderedDict[Credentials, _Entry]" = OrderedDict()
        self._pending: Dict[Credentials, Future] = {}
        # in-flight loads invalidated before completion; shared but not stored
        self._discarded: Set[Future] = set()
        self._hits = self._misses = self._loads = self._coalesced = self._evictions = 0

        ttls = [t for t in (spec.expire_after_write, spec.expire_after_access) if t]
        self._purge_interval = min(ttls) if ttls else float("inf")
        self._next_purge = clock() + self._purge_interval

    # ------------------------------------------------------------------ #
    # public
    # ------------------------------------------------------------------ #

    def authenticate(self, credentials: Credentials) -> VerificationResult:
        with self._lock:
            now = self._clock()
            entry = self._entries.get(credentials)
            if entry is not None:
                if self._expired(entry, now):
                    del self._entries[credentials]
                    self._evictions += 1
                else:
                    entry.accessed_at = now
                    self._entries.move_to_end(credentials)
                    self._hits += 1
                    return entry.result

            fut = self._pending.get(credentials)
            owner = fut is None
            if owner:
                fut = Future()
                self._pending[credentials] = fut
                self._misses += 1
            else:
                self._coalesced += 1

        if not owner:
            return fut.result()

        try:
            result = self.delegate.authenticate(credentials)
        except Exception as e:  # noqa: BLE001
            self.logger.faulted(credentials.username, f"authenticator raised: {e!r}")
            result = Faulted(reason=f"authenticator raised {type(e).__name__}")
        except BaseException as e:
            with self._lock:
                if self._pending.get(credentials) is fut:
                    del self._pending[credentials]
                self._discarded.discard(fut)
            fut.set_exception(e)
            raise

        with self._lock:
            self._loads += 1
            if self._pending.get(credentials) is fut:
                del self._pending[credentials]
            if fut in self._discarded:
                self._discarded.discard(fut)
            elif self._cacheable(result):
                self._store(credentials, result)

        fut.set_result(result)
        return result

    def invalidate(self, credentials: Credentials) -> None:
        with self._lock:
            self._entries.pop(credentials, None)
            fut = self._pending.get(credentials)
            if fut is not None:
                self._discarded.add(fut)

    def invalidate_all(
        self, predicate: Optional[Callable[[Credentials], bool]] = None
    ) -> None:
        with self._lock:
            if predicate is None:
                self._entries.clear()
                self._discarded.update(self._pending.values())
                return
            for key in [k for k in self._entries if predicate(k)]:
                del self._entries[key]
            self._discarded.update(f for k, f in self._pending.items() if predicate(k))

    def size(self) -> int:
        with self._lock:
            self._purge_expired(self._clock())
            return len(self._entries)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                loads=self._loads,
                coalesced=self._coalesced,
                evictions=self._evictions,
            )

    # ------------------------------------------------------------------ #
    # private (call with self._lock held)
    # ------------------------------------------------------------------ #

    def _cacheable(self, result: VerificationResult) -> bool:
        if isinstance(result, Faulted):
            return False
        if isinstance(result, Rejected):
            return self.cache_rejections
        return True

    def _expired(self, entry: _Entry, now: float) -> bool:
        ttl = self.spec.expire_after_write
        if ttl is not None and now - entry.written_at >= ttl:
            return True
        idle = self.spec.expire_after_access
        return idle is not None and now - entry.accessed_at >= idle

    def _purge_expired(self, now: float) -> None:
        for key in [k for k, e in self._entries.items() if self._expired(e, now)]:
            del self._entries[key]
            self._evictions += 1

    def _store(self, credentials: Credentials, result: VerificationResult) -> None:
        limit = self.spec.maximum_size
        if limit == 0 or 0 in (self.spec.expire_after_write, self.spec.expire_after_access):
            return
        now = self._clock()
        self._entries[credentials] = _Entry(result, now)
        self._entries.move_to_end(credentials)

        if now >= self._next_purge:
            self._purge_expired(now)
            self._next_purge = now + self._purge_interval
        if limit is None:
            return
        if len(self._entries) > limit:
            self._purge_expired(now)
        while len(self._entries) > limit:
            self._entries.popitem(last=False)
            self._evictions += 1
