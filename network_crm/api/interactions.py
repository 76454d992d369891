"""Interaction log endpoints."""
import uuid
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from network_crm.api.deps import get_current_user, parse_id
from network_crm.db.session import get_db
from network_crm.models import User
from network_crm.schemas import (
    InteractionCreate,
    InteractionPatch,
    InteractionRead,
    InteractionWithContact,
    Message,
)
from network_crm.services.interaction_service import InteractionService
from network_crm.config.constants import DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT

router = APIRouter(prefix="/api/interactions", tags=["interactions"])


@router.get("", response_model=List[InteractionWithContact])
async def list_interactions(
    contact_id: Optional[uuid.UUID] = Query(None, alias="contactId"),
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, le=MAX_LIST_LIMIT),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return await InteractionService(session).list_interactions(user.id, contact_id=contact_id, limit=limit)


@router.post("", response_model=InteractionRead, status_code=201)
async def create_interaction(
    payload: InteractionCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    interaction = await InteractionService(session).create_interaction(user.id, payload)
    if not interaction:
        raise HTTPException(status_code=404, detail="Contact not found")
    return interaction


@router.put("/{interaction_id}", response_model=InteractionRead)
async def update_interaction(
    interaction_id: str,
    patch: InteractionPatch,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    interaction = await InteractionService(session).update_interaction(
        parse_id(interaction_id, "Interaction"), user.id, patch
    )
    if not interaction:
        raise HTTPException(status_code=404, detail="Interaction not found")
    return interaction


@router.delete("/{interaction_id}", response_model=Message)
async def delete_interaction(
    interaction_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    deleted = await InteractionService(session).delete_interaction(parse_id(interaction_id, "Interaction"), user.id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Interaction not found")
    return {"message": "Interaction deleted successfully"}
