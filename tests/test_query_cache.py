import asyncio
import uuid
import pytest
from unittest.mock import AsyncMock, MagicMock
from network_crm.client import CrmQueries, QueryClient, QueryKey, QueryKind, QueryState, Mutation, INVALIDATES
from network_crm.core.exceptions import ApiError
from network_crm.schemas import ContactPatch, InteractionCreate, InteractionPatch, TagCreate


def fake_client():
    client = MagicMock()
    client.contacts.list = AsyncMock(return_value=["contact"])
    client.contacts.get = AsyncMock(return_value="detail")
    client.contacts.search = AsyncMock(return_value=["hit"])
    client.contacts.update = AsyncMock(return_value="updated")
    client.interactions.list = AsyncMock(return_value=["interaction"])
    client.interactions.create = AsyncMock(return_value="created")
    client.interactions.update = AsyncMock(return_value="moved")
    client.interactions.delete = AsyncMock(return_value=None)
    client.relationships.list = AsyncMock(return_value=["edge"])
    client.tags.list = AsyncMock(return_value=["tag"])
    client.tags.create = AsyncMock(return_value="tag")
    client.analytics.stats = AsyncMock(return_value="stats")
    client.analytics.dormant = AsyncMock(return_value=["dormant"])
    client.network.graph = AsyncMock(return_value="graph")
    return client


async def load_everything(queries, *contact_ids):
    await queries.contacts()
    for contact_id in contact_ids:
        await queries.contact(contact_id)
    await queries.interactions()
    await queries.relationships()
    await queries.stats()
    await queries.dormant_contacts()
    await queries.graph()
    await queries.tags()


def test_every_mutation_has_invalidation_rules():
    assert set(INVALIDATES) == set(Mutation)


def test_query_key_ignores_none_and_param_order():
    assert QueryKey.of(QueryKind.INTERACTIONS, contact_id=None) == QueryKey.of(QueryKind.INTERACTIONS)
    assert QueryKey.of(QueryKind.CONTACTS, a=1, b=2) == QueryKey.of(QueryKind.CONTACTS, b=2, a=1)
    assert QueryKey.of(QueryKind.CONTACT, contact_id=42).param("contact_id") == "42"
    assert QueryKey.of(QueryKind.CONTACTS, limit=5).cache_key == "contacts?limit=5"
    assert QueryKey.of(QueryKind.STATS).cache_key == "stats"


@pytest.mark.asyncio
async def test_concurrent_fetches_share_one_request():
    cache = QueryClient()
    started = asyncio.Event()
    release = asyncio.Event()
    calls = 0

    async def fetcher():
        nonlocal calls
        calls += 1
        started.set()
        await release.wait()
        return "data"

    key = QueryKey.of(QueryKind.STATS)
    first = asyncio.ensure_future(cache.fetch(key, fetcher))
    second = asyncio.ensure_future(cache.fetch(key, fetcher))
    await started.wait()
    assert (await cache.get(key)).state is QueryState.PENDING

    release.set()
    assert await asyncio.gather(first, second) == ["data", "data"]
    assert calls == 1
    assert (await cache.get(key)).state is QueryState.SUCCESS

    # Served from cache afterwards
    assert await cache.fetch(key, fetcher) == "data"
    assert calls == 1


@pytest.mark.asyncio
async def test_failed_fetch_is_recorded_and_retried():
    cache = QueryClient()
    key = QueryKey.of(QueryKind.GRAPH)
    fetcher = AsyncMock(side_effect=[ApiError(500, "Failed to process request"), "graph"])

    with pytest.raises(ApiError):
        await cache.fetch(key, fetcher)
    entry = await cache.get(key)
    assert entry.state is QueryState.ERROR
    assert entry.error.status == 500

    assert await cache.fetch(key, fetcher) == "graph"
    entry = await cache.get(key)
    assert entry.state is QueryState.SUCCESS
    assert entry.error is None


@pytest.mark.asyncio
async def test_stale_entries_are_refetched():
    cache = QueryClient(stale_after=0)
    fetcher = AsyncMock(side_effect=["old", "new"])
    key = QueryKey.of(QueryKind.TAGS)

    assert await cache.fetch(key, fetcher) == "old"
    assert await cache.fetch(key, fetcher) == "new"


@pytest.mark.asyncio
async def test_invalidate_with_params_is_targeted():
    cache = QueryClient()
    a, b = uuid.uuid4(), uuid.uuid4()
    await cache.fetch(QueryKey.of(QueryKind.CONTACT, contact_id=a), AsyncMock(return_value="a"))
    await cache.fetch(QueryKey.of(QueryKind.CONTACT, contact_id=b), AsyncMock(return_value="b"))

    assert await cache.invalidate(QueryKind.CONTACT, contact_id=a) == 1
    assert cache.keys() == [QueryKey.of(QueryKind.CONTACT, contact_id=b)]
    assert await cache.get(QueryKey.of(QueryKind.CONTACT, contact_id=a)) is None


@pytest.mark.asyncio
async def test_invalidation_during_fetch_drops_the_result():
    cache = QueryClient()
    started = asyncio.Event()
    release = asyncio.Event()

    async def fetcher():
        started.set()
        await release.wait()
        return "stale"

    key = QueryKey.of(QueryKind.STATS)
    pending = asyncio.ensure_future(cache.fetch(key, fetcher))
    await started.wait()
    await cache.invalidate(QueryKind.STATS)
    release.set()

    assert await pending == "stale"
    assert await cache.get(key) is None
    assert cache.keys() == []


@pytest.mark.asyncio
async def test_clear_drops_everything():
    cache = QueryClient()
    await cache.fetch(QueryKey.of(QueryKind.TAGS), AsyncMock(return_value=["tag"]))

    await cache.clear()

    assert cache.keys() == []
    assert await cache.get(QueryKey.of(QueryKind.TAGS)) is None


@pytest.mark.asyncio
async def test_create_interaction_invalidates_contact_and_aggregate_reads():
    client = fake_client()
    queries = CrmQueries(client)
    contact_id = uuid.uuid4()
    other_id = uuid.uuid4()

    await queries.contacts()
    await queries.contact(contact_id)
    await queries.contact(other_id)
    await queries.interactions()
    await queries.stats()
    await queries.graph()
    await queries.tags()

    await queries.create_interaction(InteractionCreate(contact_id=contact_id, type="call"))

    remaining = set(queries.cache.keys())
    assert remaining == {
        QueryKey.of(QueryKind.CONTACT, contact_id=other_id),
        QueryKey.of(QueryKind.TAGS),
    }

    await queries.stats()
    assert client.analytics.stats.await_count == 2


@pytest.mark.asyncio
async def test_moving_an_interaction_invalidates_lists_and_aggregates():
    client = fake_client()
    queries = CrmQueries(client)
    contact_id, other_id = uuid.uuid4(), uuid.uuid4()
    await load_everything(queries, contact_id, other_id)

    await queries.update_interaction(uuid.uuid4(), InteractionPatch(contact_id=other_id))

    assert set(queries.cache.keys()) == {
        QueryKey.of(QueryKind.RELATIONSHIPS),
        QueryKey.of(QueryKind.TAGS),
    }

    await queries.contacts()
    await queries.dormant_contacts()
    assert client.contacts.list.await_count == 2
    assert client.analytics.dormant.await_count == 2


@pytest.mark.asyncio
async def test_delete_interaction_invalidates_contacts_list():
    client = fake_client()
    queries = CrmQueries(client)
    contact_id = uuid.uuid4()
    await load_everything(queries, contact_id)

    await queries.delete_interaction(uuid.uuid4())

    assert set(queries.cache.keys()) == {
        QueryKey.of(QueryKind.RELATIONSHIPS),
        QueryKey.of(QueryKind.TAGS),
    }
    client.interactions.delete.assert_awaited_once()


@pytest.mark.asyncio
async def test_failed_mutation_keeps_cache():
    client = fake_client()
    client.contacts.update = AsyncMock(side_effect=ApiError(404, "Contact not found"))
    queries = CrmQueries(client)
    contact_id = uuid.uuid4()
    await queries.contact(contact_id)

    with pytest.raises(ApiError):
        await queries.update_contact(contact_id, ContactPatch(title="CTO"))

    entry = await queries.cache.get(QueryKey.of(QueryKind.CONTACT, contact_id=contact_id))
    assert entry.data == "detail"


@pytest.mark.asyncio
async def test_create_tag_only_invalidates_tags():
    client = fake_client()
    queries = CrmQueries(client)
    await queries.tags()
    await queries.stats()

    await queries.create_tag(TagCreate(name="vip"))

    assert queries.cache.keys() == [QueryKey.of(QueryKind.STATS)]


@pytest.mark.asyncio
async def test_short_search_never_hits_the_api():
    client = fake_client()
    queries = CrmQueries(client)

    assert await queries.search_contacts("ch") == []
    assert await queries.search_contacts("   ") == []
    client.contacts.search.assert_not_awaited()

    assert await queries.search_contacts(" chen ") == ["hit"]
    client.contacts.search.assert_awaited_once_with("chen")
