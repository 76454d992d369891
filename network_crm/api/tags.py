"""Tag endpoints."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from network_crm.api.deps import get_current_user, parse_id
from network_crm.db.session import get_db
from network_crm.models import User
from network_crm.schemas import TagCreate, TagRead, Message
from network_crm.services.tag_service import TagService

router = APIRouter(prefix="/api/tags", tags=["tags"])


@router.get("", response_model=List[TagRead])
async def list_tags(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return await TagService(session).list_tags(user.id)


@router.post("", response_model=TagRead, status_code=201)
async def create_tag(
    payload: TagCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return await TagService(session).create_tag(user.id, payload)


@router.delete("/{tag_id}", response_model=Message)
async def delete_tag(
    tag_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    deleted = await TagService(session).delete_tag(parse_id(tag_id, "Tag"), user.id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Tag not found")
    return {"message": "Tag deleted successfully"}
