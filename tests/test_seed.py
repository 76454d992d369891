import pytest
from network_crm.db import seed as seed_module
from network_crm.services.analytics_service import AnalyticsService
from network_crm.services.tag_service import TagService
from network_crm.services.user_service import UserService


@pytest.mark.asyncio
async def test_seed_builds_demo_network(session_factory, monkeypatch):
    monkeypatch.setattr(seed_module, "AsyncSessionLocal", session_factory)

    await seed_module.seed(8, rng_seed=7)

    async with session_factory() as session:
        demo = await UserService(session).get_user_by_username(seed_module.DEMO_USERNAME)
        assert demo is not None

        stats = await AnalyticsService(session).get_network_stats(demo.id)
        assert stats.total_contacts == 8

        graph = await AnalyticsService(session).get_network_graph_data(demo.id)
        assert len(graph.links) == 8

        tags = await TagService(session).list_tags(demo.id)
        assert len(tags) == len(seed_module.SAMPLE_TAGS)


@pytest.mark.asyncio
async def test_seed_reuses_existing_demo_user(session_factory, monkeypatch):
    monkeypatch.setattr(seed_module, "AsyncSessionLocal", session_factory)

    await seed_module.seed(2)
    await seed_module.seed(2)

    async with session_factory() as session:
        demo = await UserService(session).get_user_by_username(seed_module.DEMO_USERNAME)
        stats = await AnalyticsService(session).get_network_stats(demo.id)
        assert stats.total_contacts == 4
