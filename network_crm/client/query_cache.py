"""
Client-side query cache.

Reads are cached by a typed QueryKey in an aiocache memory backend, and
concurrent reads of the same key are serialised behind an aiocache RedLock so
only the first caller hits the API. Mutations declare, in INVALIDATES, which
kinds of query they make stale; the table is checked for completeness at import.
"""
import enum
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, FrozenSet, List, Optional, Set, Tuple, TypeVar

from aiocache import SimpleMemoryCache
from aiocache.lock import RedLock
from aiocache.serializers import NullSerializer

from network_crm.config.constants import CLIENT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QueryKind(str, enum.Enum):
    CONTACTS = "contacts"
    CONTACT = "contact"
    CONTACT_SEARCH = "contact_search"
    INTERACTIONS = "interactions"
    RELATIONSHIPS = "relationships"
    TAGS = "tags"
    STATS = "stats"
    DORMANT = "dormant"
    GRAPH = "graph"


class Mutation(str, enum.Enum):
    CREATE_CONTACT = "create_contact"
    UPDATE_CONTACT = "update_contact"
    DELETE_CONTACT = "delete_contact"
    TAG_CONTACT = "tag_contact"
    CREATE_INTERACTION = "create_interaction"
    UPDATE_INTERACTION = "update_interaction"
    DELETE_INTERACTION = "delete_interaction"
    CREATE_RELATIONSHIP = "create_relationship"
    DELETE_RELATIONSHIP = "delete_relationship"
    CREATE_TAG = "create_tag"
    DELETE_TAG = "delete_tag"


class QueryState(str, enum.Enum):
    PENDING = "pending"
    ERROR = "error"
    SUCCESS = "success"


_CONTACT_READS = frozenset({QueryKind.CONTACTS, QueryKind.CONTACT, QueryKind.CONTACT_SEARCH})
_AGGREGATES = frozenset({QueryKind.STATS, QueryKind.DORMANT, QueryKind.GRAPH})
# The contacts list embeds each contact's interactions
_INTERACTION_READS = frozenset({QueryKind.INTERACTIONS, QueryKind.CONTACTS, QueryKind.CONTACT})

INVALIDATES: Dict[Mutation, FrozenSet[QueryKind]] = {
    Mutation.CREATE_CONTACT: _CONTACT_READS | _AGGREGATES,
    Mutation.UPDATE_CONTACT: _CONTACT_READS | _AGGREGATES | {QueryKind.INTERACTIONS},
    Mutation.DELETE_CONTACT: _CONTACT_READS | _AGGREGATES | {QueryKind.INTERACTIONS, QueryKind.RELATIONSHIPS},
    Mutation.TAG_CONTACT: frozenset({QueryKind.CONTACT}),
    # A new interaction also bumps the contact's recency ordering
    Mutation.CREATE_INTERACTION: _CONTACT_READS | _AGGREGATES | {QueryKind.INTERACTIONS},
    # An update may move the interaction to another contact, changing dormancy
    Mutation.UPDATE_INTERACTION: _INTERACTION_READS | _AGGREGATES,
    Mutation.DELETE_INTERACTION: _INTERACTION_READS | _AGGREGATES,
    Mutation.CREATE_RELATIONSHIP: frozenset({QueryKind.RELATIONSHIPS, QueryKind.GRAPH}),
    Mutation.DELETE_RELATIONSHIP: frozenset({QueryKind.RELATIONSHIPS, QueryKind.GRAPH}),
    Mutation.CREATE_TAG: frozenset({QueryKind.TAGS}),
    Mutation.DELETE_TAG: frozenset({QueryKind.TAGS, QueryKind.CONTACT}),
}


def _check_invalidation_table():
    missing = [m.value for m in Mutation if m not in INVALIDATES]
    if missing:
        raise RuntimeError(f"Mutations without invalidation rules: {missing}")


_check_invalidation_table()


@dataclass(frozen=True)
class QueryKey:
    kind: QueryKind
    params: Tuple[Tuple[str, Any], ...] = ()

    @classmethod
    def of(cls, kind: QueryKind, **params) -> "QueryKey":
        # None params are equivalent to absent ones
        items = tuple(sorted((k, str(v)) for k, v in params.items() if v is not None))
        return cls(kind, items)

    def param(self, name: str) -> Optional[str]:
        return dict(self.params).get(name)

    @property
    def cache_key(self) -> str:
        query = "&".join(f"{k}={v}" for k, v in self.params)
        return f"{self.kind.value}?{query}" if query else self.kind.value


@dataclass
class QueryEntry:
    state: QueryState = QueryState.PENDING
    data: Any = None
    error: Optional[BaseException] = None
    updated_at: Optional[float] = None


class QueryClient:
    """aiocache-backed cache of API reads with mutation-driven invalidation."""

    def __init__(self, stale_after: Optional[float] = None, lock_lease: float = CLIENT_TIMEOUT_SECONDS):
        """
        Args:
            stale_after: Seconds after which a successful entry is refetched;
                None keeps entries until a mutation invalidates them
            lock_lease: Longest time concurrent readers wait on the first
                caller's request before fetching themselves
        """
        self.stale_after = stale_after
        self.lock_lease = lock_lease
        # Entries are stored as-is; lock keys share the backend so each client gets its own namespace
        self._cache = SimpleMemoryCache(serializer=NullSerializer(), namespace=f"crm-{uuid.uuid4().hex}:")
        self._keys: Set[QueryKey] = set()

    async def get(self, key: QueryKey) -> Optional[QueryEntry]:
        return await self._cache.get(key.cache_key)

    def keys(self) -> List[QueryKey]:
        return list(self._keys)

    def _is_fresh(self, entry: Optional[QueryEntry]) -> bool:
        if entry is None or entry.state is not QueryState.SUCCESS:
            return False
        if self.stale_after is None:
            return True
        return time.monotonic() - entry.updated_at < self.stale_after

    async def _store(self, key: QueryKey, entry: QueryEntry):
        await self._cache.set(key.cache_key, entry)
        self._keys.add(key)

    async def fetch(self, key: QueryKey, fetcher: Callable[[], Awaitable[T]]) -> T:
        """
        Return cached data for key, or run fetcher and cache its result.

        Callers arriving while a fetch for the same key is running wait for it
        and read its result from the cache instead of starting another request.
        """
        entry = await self.get(key)
        if self._is_fresh(entry):
            return entry.data

        async with RedLock(self._cache, key.cache_key, lease=self.lock_lease):
            # Filled by whoever held the lock before us
            entry = await self.get(key)
            if self._is_fresh(entry):
                return entry.data

            entry = QueryEntry()
            await self._store(key, entry)
            try:
                data = await fetcher()
            except Exception as e:
                entry.state = QueryState.ERROR
                entry.error = e
                logger.warning(f"Query {key.kind.value} failed: {e}")
                await self._keep(key, entry)
                raise

            entry.state = QueryState.SUCCESS
            entry.data = data
            entry.updated_at = time.monotonic()
            await self._keep(key, entry)
            return data

    async def _keep(self, key: QueryKey, entry: QueryEntry):
        # An entry invalidated while its fetch was running stays dropped
        if await self.get(key) is entry:
            await self._store(key, entry)

    async def invalidate(self, kind: QueryKind, **params) -> int:
        """
        Drop cached entries of one kind; with params, only entries matching them.

        A fetch still in flight for a dropped key completes for its callers but
        its result is not kept.
        """
        wanted = QueryKey.of(kind, **params).params
        dropped = 0
        for key in list(self._keys):
            if key.kind is not kind:
                continue
            if wanted and not set(wanted).issubset(key.params):
                continue
            await self._cache.delete(key.cache_key)
            self._keys.discard(key)
            dropped += 1
        return dropped

    async def invalidate_for(self, mutation: Mutation, contact_id: Optional[Any] = None) -> int:
        """Apply a mutation's invalidation rules.

        With contact_id, contact detail entries are dropped only for that contact.
        """
        dropped = 0
        for kind in INVALIDATES[mutation]:
            if kind is QueryKind.CONTACT and contact_id is not None:
                dropped += await self.invalidate(kind, contact_id=contact_id)
            else:
                dropped += await self.invalidate(kind)
        return dropped

    async def mutate(
        self,
        mutation: Mutation,
        call: Callable[[], Awaitable[T]],
        contact_id: Optional[Any] = None,
    ) -> T:
        """Run a write; invalidate dependent queries only if it succeeds."""
        result = await call()
        dropped = await self.invalidate_for(mutation, contact_id=contact_id)
        logger.debug(f"{mutation.value} invalidated {dropped} cached queries")
        return result

    async def clear(self):
        for key in list(self._keys):
            await self._cache.delete(key.cache_key)
        self._keys.clear()
