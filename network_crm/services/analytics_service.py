from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from network_crm.models.contact import Contact
from network_crm.models.interaction import Interaction
from network_crm.models.relationship import Relationship
from network_crm.schemas.analytics import NetworkStats, NetworkGraph, GraphNode, GraphLink
from network_crm.db.base import utcnow
from network_crm.db.decorators import storage_operation
from network_crm.config.constants import (
    STRONG_CONNECTION_THRESHOLD,
    DORMANT_AFTER_DAYS,
    RECENT_INTERACTION_DAYS,
    DEFAULT_DORMANT_LIMIT,
    DEFAULT_GRAPH_CATEGORY,
    DEFAULT_LINK_TYPE,
    DEFAULT_RELATIONSHIP_STRENGTH,
)
from typing import List, Optional
import uuid
from datetime import datetime, timedelta

class AnalyticsService:
    def __init__(self, session: AsyncSession):
        self.session = session

    def _has_interaction_since(self, user_id: uuid.UUID, since: datetime):
        # Correlated EXISTS against the outer Contact row
        return select(Interaction.id).where(
            Interaction.contact_id == Contact.id,
            Interaction.user_id == user_id,
            Interaction.created_at >= since,
        ).exists()

    @storage_operation
    async def get_network_stats(self, user_id: uuid.UUID, now: Optional[datetime] = None) -> NetworkStats:
        """
        Dashboard counters for a user, evaluated against the clock at query time.

        - total_contacts: every contact owned by the user
        - strong_connections: relationship strength of 4 or more
        - recent_interactions: interactions logged in the last 7 days
        - dormant_contacts: contacts without any interaction in the last 30 days,
          including contacts that were never interacted with
        """
        now = now or utcnow()

        total_stmt = select(func.count(Contact.id)).where(Contact.user_id == user_id)
        total_contacts = (await self.session.execute(total_stmt)).scalar() or 0

        strong_stmt = select(func.count(Contact.id)).where(
            Contact.user_id == user_id,
            Contact.relationship_strength >= STRONG_CONNECTION_THRESHOLD,
        )
        strong_connections = (await self.session.execute(strong_stmt)).scalar() or 0

        recent_stmt = select(func.count(Interaction.id)).where(
            Interaction.user_id == user_id,
            Interaction.created_at >= now - timedelta(days=RECENT_INTERACTION_DAYS),
        )
        recent_interactions = (await self.session.execute(recent_stmt)).scalar() or 0

        dormant_since = now - timedelta(days=DORMANT_AFTER_DAYS)
        dormant_stmt = select(func.count(Contact.id)).where(
            Contact.user_id == user_id,
            ~self._has_interaction_since(user_id, dormant_since),
        )
        dormant_contacts = (await self.session.execute(dormant_stmt)).scalar() or 0

        return NetworkStats(
            total_contacts=total_contacts,
            strong_connections=strong_connections,
            recent_interactions=recent_interactions,
            dormant_contacts=dormant_contacts,
        )

    @storage_operation
    async def get_dormant_contacts(
        self,
        user_id: uuid.UUID,
        limit: int = DEFAULT_DORMANT_LIMIT,
        now: Optional[datetime] = None,
    ) -> List[Contact]:
        """
        Find contacts with no interactions in the last 30 days.
        Strongest relationships come first: those are the ones worth reviving.
        """
        now = now or utcnow()
        dormant_since = now - timedelta(days=DORMANT_AFTER_DAYS)

        stmt = select(Contact).where(
            Contact.user_id == user_id,
            ~self._has_interaction_since(user_id, dormant_since),
        ).order_by(
            Contact.relationship_strength.desc(),
            Contact.updated_at.desc(),
        ).limit(limit)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    @storage_operation
    async def get_network_graph_data(self, user_id: uuid.UUID) -> NetworkGraph:
        """Every contact as a node and every relationship as a directed link."""
        contacts_stmt = select(
            Contact.id,
            Contact.first_name,
            Contact.last_name,
            Contact.category,
            Contact.relationship_strength,
            Contact.company,
        ).where(Contact.user_id == user_id)
        contact_rows = (await self.session.execute(contacts_stmt)).all()

        nodes = [
            GraphNode(
                id=row[0],
                name=f"{row[1]} {row[2]}",
                category=row[3] or DEFAULT_GRAPH_CATEGORY,
                strength=row[4] or DEFAULT_RELATIONSHIP_STRENGTH,
                company=row[5] or None,
            )
            for row in contact_rows
        ]

        links_stmt = select(Relationship).where(Relationship.user_id == user_id)
        relationships = (await self.session.execute(links_stmt)).scalars().all()

        links = [
            GraphLink(
                source=rel.from_contact_id,
                target=rel.to_contact_id,
                type=rel.relationship_type or DEFAULT_LINK_TYPE,
                strength=rel.strength or DEFAULT_RELATIONSHIP_STRENGTH,
            )
            for rel in relationships
        ]

        return NetworkGraph(nodes=nodes, links=links)
