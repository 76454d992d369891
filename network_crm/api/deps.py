"""Request-scoped dependencies shared by the API routers."""
import logging
import uuid
from typing import Optional
from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from network_crm.db.session import get_db
from network_crm.models import User
from network_crm.services.user_service import UserService
from network_crm.core.config import settings

logger = logging.getLogger(__name__)


async def get_current_user(
    x_user_id: Optional[str] = Header(None),
    session: AsyncSession = Depends(get_db),
) -> User:
    """
    Resolve the acting user for this request.

    The X-User-Id header names the user explicitly. Without it, and only while
    DEMO_USER_FALLBACK is enabled, the oldest user row acts as the demo identity.
    This is not authentication: it must sit behind a trusted gateway.
    """
    user_service = UserService(session)

    if x_user_id:
        try:
            user_id = uuid.UUID(x_user_id)
        except ValueError:
            raise HTTPException(status_code=401, detail="Unknown user")
        user = await user_service.get_user(user_id)
        if not user:
            logger.warning(f"Request for unknown user {x_user_id}")
            raise HTTPException(status_code=401, detail="Unknown user")
        return user

    if settings.DEMO_USER_FALLBACK:
        user = await user_service.get_default_user()
        if user:
            return user

    raise HTTPException(status_code=401, detail="Authentication required")


def parse_id(value: str, entity: str) -> uuid.UUID:
    """Path ids that are not UUIDs cannot exist, so they are plain 404s."""
    try:
        return uuid.UUID(value)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"{entity} not found")
