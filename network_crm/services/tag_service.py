from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from network_crm.models.contact import Contact
from network_crm.models.tag import Tag, ContactTag
from network_crm.schemas.tag import TagCreate
from network_crm.db.decorators import storage_operation
from typing import List, Optional
import uuid
import logging

logger = logging.getLogger(__name__)


class TagService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _owns(self, user_id: uuid.UUID, contact_id: uuid.UUID, tag_id: uuid.UUID) -> bool:
        contact = (await self.session.execute(
            select(Contact.id).where(Contact.id == contact_id, Contact.user_id == user_id)
        )).scalar_one_or_none()
        tag = (await self.session.execute(
            select(Tag.id).where(Tag.id == tag_id, Tag.user_id == user_id)
        )).scalar_one_or_none()
        return contact is not None and tag is not None

    @storage_operation
    async def list_tags(self, user_id: uuid.UUID) -> List[Tag]:
        stmt = select(Tag).where(Tag.user_id == user_id).order_by(Tag.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    @storage_operation
    async def create_tag(self, user_id: uuid.UUID, payload: TagCreate) -> Tag:
        tag = Tag(user_id=user_id, **payload.model_dump())
        self.session.add(tag)
        await self.session.commit()
        await self.session.refresh(tag)
        return tag

    @storage_operation
    async def delete_tag(self, tag_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        tag = (await self.session.execute(
            select(Tag).where(Tag.id == tag_id, Tag.user_id == user_id)
        )).scalar_one_or_none()
        if not tag:
            return False

        await self.session.execute(delete(ContactTag).where(ContactTag.tag_id == tag.id))
        await self.session.execute(delete(Tag).where(Tag.id == tag.id))
        await self.session.commit()
        return True

    @storage_operation
    async def tag_contact(self, contact_id: uuid.UUID, tag_id: uuid.UUID, user_id: uuid.UUID) -> Optional[ContactTag]:
        """Attach a tag to a contact. Attaching twice returns the existing link."""
        if not await self._owns(user_id, contact_id, tag_id):
            return None

        existing = (await self.session.execute(
            select(ContactTag).where(ContactTag.contact_id == contact_id, ContactTag.tag_id == tag_id)
        )).scalar_one_or_none()
        if existing:
            return existing

        link = ContactTag(contact_id=contact_id, tag_id=tag_id)
        self.session.add(link)
        await self.session.commit()
        await self.session.refresh(link)
        return link

    @storage_operation
    async def untag_contact(self, contact_id: uuid.UUID, tag_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        if not await self._owns(user_id, contact_id, tag_id):
            return False

        result = await self.session.execute(
            delete(ContactTag).where(ContactTag.contact_id == contact_id, ContactTag.tag_id == tag_id)
        )
        await self.session.commit()
        return result.rowcount > 0
