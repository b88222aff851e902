"""
Request cache and the query/mutation hooks built on it.

Hooks never raise ``AccountHubError``: a failed fetch or mutation comes back
as an error result carrying the exception, and for mutations a localized
notification the caller can show as is.
"""
import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Hashable, Iterable, Optional, Tuple

from pydantic import BaseModel

from accounthub.core.config import settings
from accounthub.core.exceptions import AccountHubError, ServiceError
from accounthub.core.i18n import DEFAULT_LANGUAGE, get_translation

logger = logging.getLogger(__name__)

CacheKey = Tuple[Hashable, ...]

# every audited mutation appends to the audit trail
AUDIT_LOGS: CacheKey = ("audit_logs",)


class QueryStatus(str, Enum):
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class QueryResult:
    status: QueryStatus = QueryStatus.LOADING
    data: Any = None
    error: Optional[AccountHubError] = None

    @property
    def is_loading(self) -> bool:
        return self.status == QueryStatus.LOADING

    @property
    def is_success(self) -> bool:
        return self.status == QueryStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status == QueryStatus.ERROR


@dataclass
class MutationResult:
    ok: bool
    data: Any = None
    error: Optional[AccountHubError] = None
    notification: str = ""


class QueryCache:
    """
    TTL cache of query results keyed by ``(entity, ...)`` tuples.

    One instance lives on ``app.state`` for the lifetime of the app.
    """

    def __init__(self, ttl_seconds: Optional[float] = None, clock: Callable[[], float] = time.monotonic):
        self._ttl = settings.QUERY_CACHE_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._store: Dict[CacheKey, Tuple[float, Any]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: CacheKey) -> Tuple[bool, Any]:
        """Return ``(hit, value)``. Expired entries count as misses and are dropped."""
        with self._lock:
            entry = self._store.get(key)
            if entry is not None:
                expires_at, value = entry
                if self._clock() < expires_at:
                    self._hits += 1
                    return True, value
                del self._store[key]
            self._misses += 1
            return False, None

    def set(self, key: CacheKey, value: Any) -> None:
        with self._lock:
            self._store[key] = (self._clock() + self._ttl, value)

    def invalidate(self, prefix: CacheKey) -> int:
        """Drop every key starting with ``prefix``. Returns how many were dropped."""
        size = len(prefix)
        with self._lock:
            stale = [key for key in self._store if key[:size] == prefix]
            for key in stale:
                del self._store[key]
        if stale:
            logger.debug("Invalidated %d cached queries under %s", len(stale), prefix)
        return len(stale)

    def clear(self) -> int:
        with self._lock:
            count = len(self._store)
            self._store.clear()
        return count

    def handle_auth_event(self, event: str, admin: Any = None) -> None:
        """Auth listener: forget everything cached once an admin signs out."""
        if event == "SIGNED_OUT":
            count = self.clear()
            logger.info("Cleared %d cached queries on sign-out", count)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {"size": len(self._store), "hits": self._hits, "misses": self._misses}

    def __contains__(self, key: CacheKey) -> bool:
        return self.get(key)[0]

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


def filters_key(filters: Optional[BaseModel]) -> Optional[str]:
    """Hashable form of a filter object for use inside a cache key."""
    if filters is None:
        return None
    return filters.model_dump_json(exclude_none=True)


def use_query(cache: QueryCache, key: CacheKey, fetch: Callable[[], Any]) -> QueryResult:
    """Serve ``key`` from the cache, or run ``fetch`` and cache a successful result."""
    hit, value = cache.get(key)
    if hit:
        return QueryResult(status=QueryStatus.SUCCESS, data=value)

    result = QueryResult()
    try:
        data = fetch()
    except AccountHubError as e:
        logger.warning("Query %s failed: %s", key, e)
        result.status = QueryStatus.ERROR
        result.error = e
        return result

    cache.set(key, data)
    result.status = QueryStatus.SUCCESS
    result.data = data
    return result


def peek(cache: QueryCache, key: CacheKey) -> Any:
    """Cached value for ``key`` without fetching, or None."""
    return cache.get(key)[1]


def error_reason(error: AccountHubError) -> str:
    return error.reason if isinstance(error, ServiceError) else error.message


def failure_notification(error: AccountHubError, action: str, language: str = DEFAULT_LANGUAGE) -> str:
    return get_translation(
        "operation_failed",
        language,
        action=get_translation(f"action_{action}", language),
        error=error_reason(error),
    )


def use_mutation(
    cache: QueryCache,
    mutate: Callable[[], Any],
    invalidates: Iterable[CacheKey],
    success_key: str,
    action: str,
    entity: str,
    language: str = DEFAULT_LANGUAGE,
    **message_kwargs: Any,
) -> MutationResult:
    """
    Run ``mutate`` and build the notification for its outcome.

    The ``invalidates`` prefixes are dropped from the cache only when the
    mutation succeeds; a failed mutation leaves cached data untouched.
    """
    try:
        data = mutate()
    except AccountHubError as e:
        logger.warning("Mutation %s on %s failed: %s", action, entity, e)
        return MutationResult(ok=False, error=e, notification=failure_notification(e, action, language))

    for prefix in [*invalidates, AUDIT_LOGS]:
        cache.invalidate(prefix)
    notification = get_translation(
        success_key,
        language,
        entity=get_translation(f"entity_{entity}", language),
        **message_kwargs,
    )
    return MutationResult(ok=True, data=data, notification=notification)
