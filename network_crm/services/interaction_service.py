from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.orm import contains_eager
from network_crm.models.contact import Contact
from network_crm.models.interaction import Interaction
from network_crm.schemas.interaction import InteractionCreate, InteractionPatch
from network_crm.db.base import utcnow
from network_crm.db.decorators import storage_operation
from network_crm.config.constants import DEFAULT_LIST_LIMIT
from datetime import datetime
from typing import List, Optional
import uuid
import logging

logger = logging.getLogger(__name__)


class InteractionService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_owned_contact(self, contact_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Contact]:
        stmt = select(Contact).where(Contact.id == contact_id, Contact.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @storage_operation
    async def list_interactions(
        self,
        user_id: uuid.UUID,
        contact_id: Optional[uuid.UUID] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> List[Interaction]:
        """Newest interactions first, each joined with its contact."""
        stmt = (
            select(Interaction)
            .join(Interaction.contact)
            .options(contains_eager(Interaction.contact))
            .where(Interaction.user_id == user_id, Contact.user_id == user_id)
        )
        if contact_id:
            stmt = stmt.where(Interaction.contact_id == contact_id)
        stmt = stmt.order_by(Interaction.created_at.desc()).limit(limit)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    @storage_operation
    async def create_interaction(
        self,
        user_id: uuid.UUID,
        payload: InteractionCreate,
        occurred_at: Optional[datetime] = None,
    ) -> Optional[Interaction]:
        """
        Log an interaction and mark its contact as recently active.

        The insert and the contact's updated_at refresh are committed together,
        so "most recently active" ordering never sees one without the other.

        Args:
            user_id: Acting user
            payload: Validated interaction fields
            occurred_at: Backdated creation time (seeding/imports); defaults to now

        Returns:
            The new interaction, or None when the contact is not owned by the user
        """
        contact = await self._get_owned_contact(payload.contact_id, user_id)
        if not contact:
            return None

        created_at = occurred_at or utcnow()
        interaction = Interaction(user_id=user_id, created_at=created_at, **payload.model_dump())
        self.session.add(interaction)

        touched_at = utcnow()
        if touched_at < created_at:
            touched_at = created_at
        contact.updated_at = touched_at

        await self.session.commit()
        await self.session.refresh(interaction)
        logger.info(f"Logged {interaction.type} interaction {interaction.id} for contact {contact.id}")
        return interaction

    @storage_operation
    async def update_interaction(
        self,
        interaction_id: uuid.UUID,
        user_id: uuid.UUID,
        patch: InteractionPatch,
    ) -> Optional[Interaction]:
        stmt = select(Interaction).where(Interaction.id == interaction_id, Interaction.user_id == user_id)
        result = await self.session.execute(stmt)
        interaction = result.scalar_one_or_none()
        if not interaction:
            return None

        changes = patch.changes()
        # Moving an interaction to another contact requires owning that contact too
        new_contact_id = changes.get("contact_id")
        if new_contact_id and new_contact_id != interaction.contact_id:
            if not await self._get_owned_contact(new_contact_id, user_id):
                return None

        for field, value in changes.items():
            setattr(interaction, field, value)

        await self.session.commit()
        await self.session.refresh(interaction)
        return interaction

    @storage_operation
    async def delete_interaction(self, interaction_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        result = await self.session.execute(
            delete(Interaction).where(Interaction.id == interaction_id, Interaction.user_id == user_id)
        )
        await self.session.commit()
        return result.rowcount > 0
