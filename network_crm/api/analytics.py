"""Read-only aggregate endpoints: dashboard stats and the network graph."""
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from network_crm.api.deps import get_current_user
from network_crm.db.session import get_db
from network_crm.models import User
from network_crm.schemas import NetworkStats, NetworkGraph, ContactRead
from network_crm.services.analytics_service import AnalyticsService
from network_crm.config.constants import DEFAULT_DORMANT_LIMIT, MAX_LIST_LIMIT

router = APIRouter(prefix="/api", tags=["analytics"])


@router.get("/analytics/stats", response_model=NetworkStats)
async def network_stats(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return await AnalyticsService(session).get_network_stats(user.id)


@router.get("/analytics/dormant", response_model=List[ContactRead])
async def dormant_contacts(
    limit: int = Query(DEFAULT_DORMANT_LIMIT, ge=1, le=MAX_LIST_LIMIT),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return await AnalyticsService(session).get_dormant_contacts(user.id, limit=limit)


@router.get("/network/graph", response_model=NetworkGraph)
async def network_graph(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return await AnalyticsService(session).get_network_graph_data(user.id)
