from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
from network_crm.models.contact import Contact
from network_crm.models.relationship import Relationship
from network_crm.schemas.relationship import RelationshipCreate
from network_crm.db.decorators import storage_operation
from typing import List, Optional
import uuid
import logging

logger = logging.getLogger(__name__)


class RelationshipService:
    """Directed contact-to-contact edges used for the network graph."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @storage_operation
    async def list_relationships(self, user_id: uuid.UUID) -> List[Relationship]:
        stmt = select(Relationship).where(Relationship.user_id == user_id).order_by(Relationship.created_at)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    @storage_operation
    async def create_relationship(self, user_id: uuid.UUID, payload: RelationshipCreate) -> Optional[Relationship]:
        # Both endpoints must be contacts of the same user
        endpoints = {payload.from_contact_id, payload.to_contact_id}
        stmt = select(func.count(Contact.id)).where(
            Contact.user_id == user_id,
            Contact.id.in_(list(endpoints)),
        )
        owned = (await self.session.execute(stmt)).scalar() or 0
        if owned != len(endpoints):
            return None

        relationship = Relationship(user_id=user_id, **payload.model_dump())
        self.session.add(relationship)
        await self.session.commit()
        await self.session.refresh(relationship)
        logger.info(
            f"Linked contact {payload.from_contact_id} -> {payload.to_contact_id} for user {user_id}"
        )
        return relationship

    @storage_operation
    async def delete_relationship(self, relationship_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        result = await self.session.execute(
            delete(Relationship).where(Relationship.id == relationship_id, Relationship.user_id == user_id)
        )
        await self.session.commit()
        return result.rowcount > 0
