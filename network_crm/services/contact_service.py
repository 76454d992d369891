from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, or_
from sqlalchemy.orm import selectinload
from network_crm.models.contact import Contact
from network_crm.models.interaction import Interaction
from network_crm.models.relationship import Relationship
from network_crm.models.tag import ContactTag
from network_crm.schemas.contact import ContactCreate, ContactPatch
from network_crm.db.base import utcnow
from network_crm.db.decorators import storage_operation
from network_crm.config.constants import DEFAULT_LIST_LIMIT, MAX_SEARCH_QUERY_LENGTH
from typing import List, Optional
import uuid
import logging

logger = logging.getLogger(__name__)


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input only matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ContactService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_owned(self, contact_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Contact]:
        stmt = select(Contact).where(Contact.id == contact_id, Contact.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @storage_operation
    async def list_contacts(self, user_id: uuid.UUID, limit: int = DEFAULT_LIST_LIMIT) -> List[Contact]:
        """Most recently active contacts first, with their interactions."""
        stmt = (
            select(Contact)
            .where(Contact.user_id == user_id)
            .options(selectinload(Contact.interactions))
            .order_by(Contact.updated_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    @storage_operation
    async def get_contact(self, contact_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Contact]:
        """
        Fetch one contact with its interactions (newest first) and tags.

        A contact owned by another user is reported exactly like a missing one.
        """
        stmt = (
            select(Contact)
            .where(Contact.id == contact_id, Contact.user_id == user_id)
            .options(selectinload(Contact.interactions), selectinload(Contact.tags))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @storage_operation
    async def search_contacts(self, user_id: uuid.UUID, query_str: str) -> List[Contact]:
        # Input validation: blank or oversized queries match nothing
        query_str = (query_str or "").strip()
        if not query_str or len(query_str) > MAX_SEARCH_QUERY_LENGTH:
            return []

        search_pattern = f"%{escape_like(query_str)}%"
        stmt = select(Contact).where(
            Contact.user_id == user_id,
            or_(
                Contact.first_name.ilike(search_pattern, escape="\\"),
                Contact.last_name.ilike(search_pattern, escape="\\"),
                Contact.email.ilike(search_pattern, escape="\\"),
                Contact.company.ilike(search_pattern, escape="\\"),
                Contact.title.ilike(search_pattern, escape="\\"),
            )
        ).order_by(Contact.updated_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    @storage_operation
    async def create_contact(self, user_id: uuid.UUID, payload: ContactCreate) -> Contact:
        now = utcnow()
        contact = Contact(
            user_id=user_id,
            created_at=now,
            updated_at=now,
            **payload.model_dump(),
        )
        self.session.add(contact)
        await self.session.commit()
        await self.session.refresh(contact)
        logger.info(f"Created contact {contact.id} for user {user_id}")
        return contact

    @storage_operation
    async def update_contact(
        self,
        contact_id: uuid.UUID,
        user_id: uuid.UUID,
        patch: ContactPatch,
    ) -> Optional[Contact]:
        contact = await self._get_owned(contact_id, user_id)
        if not contact:
            return None

        for field, value in patch.changes().items():
            setattr(contact, field, value)
        contact.updated_at = utcnow()

        await self.session.commit()
        await self.session.refresh(contact)
        return contact

    @storage_operation
    async def delete_contact(self, contact_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        """
        Delete a contact together with everything that references it.

        Interactions, relationships on either side and tag links are removed
        in the same transaction as the contact itself.
        """
        contact = await self._get_owned(contact_id, user_id)
        if not contact:
            return False

        await self.session.execute(
            delete(Interaction).where(Interaction.contact_id == contact.id)
        )
        await self.session.execute(
            delete(Relationship).where(
                or_(
                    Relationship.from_contact_id == contact.id,
                    Relationship.to_contact_id == contact.id,
                )
            )
        )
        await self.session.execute(
            delete(ContactTag).where(ContactTag.contact_id == contact.id)
        )
        await self.session.execute(
            delete(Contact).where(Contact.id == contact.id, Contact.user_id == user_id)
        )
        await self.session.commit()
        logger.info(f"Deleted contact {contact_id} for user {user_id}")
        return True
