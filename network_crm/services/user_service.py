from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from network_crm.models.user import User
from network_crm.schemas.user import UserCreate
from network_crm.db.decorators import storage_operation
from typing import Optional
import uuid

class UserService:
    def __init__(self, session: AsyncSession):
        self.session = session

    @storage_operation
    async def get_user(self, user_id: uuid.UUID) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @storage_operation
    async def get_user_by_username(self, username: str) -> Optional[User]:
        stmt = select(User).where(User.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @storage_operation
    async def get_default_user(self) -> Optional[User]:
        """Oldest user row; identity stand-in for requests without X-User-Id."""
        stmt = select(User).order_by(User.created_at.asc()).limit(1)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    @storage_operation
    async def create_user(self, payload: UserCreate) -> User:
        user = User(**payload.model_dump())
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user
