"""Contact endpoints."""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from network_crm.api.deps import get_current_user, parse_id
from network_crm.db.session import get_db
from network_crm.models import User
from network_crm.schemas import (
    ContactCreate,
    ContactPatch,
    ContactRead,
    ContactWithInteractions,
    ContactDetail,
    Message,
)
from network_crm.services.contact_service import ContactService
from network_crm.services.tag_service import TagService
from network_crm.config.constants import DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT

router = APIRouter(prefix="/api/contacts", tags=["contacts"])


@router.get("", response_model=List[ContactWithInteractions])
async def list_contacts(
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, le=MAX_LIST_LIMIT),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return await ContactService(session).list_contacts(user.id, limit=limit)


@router.get("/search", response_model=List[ContactRead])
async def search_contacts(
    q: Optional[str] = Query(None),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Query parameter required")
    return await ContactService(session).search_contacts(user.id, q)


@router.get("/{contact_id}", response_model=ContactDetail)
async def get_contact(
    contact_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    contact = await ContactService(session).get_contact(parse_id(contact_id, "Contact"), user.id)
    if not contact:
        raise HTTPException(status_code=404, detail="Contact not found")
    return contact


@router.post("", response_model=ContactRead, status_code=201)
async def create_contact(
    payload: ContactCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return await ContactService(session).create_contact(user.id, payload)


@router.put("/{contact_id}", response_model=ContactRead)
async def update_contact(
    contact_id: str,
    patch: ContactPatch,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    contact = await ContactService(session).update_contact(parse_id(contact_id, "Contact"), user.id, patch)
    if not contact:
        raise HTTPException(status_code=404, detail="Contact not found")
    return contact


@router.delete("/{contact_id}", response_model=Message)
async def delete_contact(
    contact_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    deleted = await ContactService(session).delete_contact(parse_id(contact_id, "Contact"), user.id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Contact not found")
    return {"message": "Contact deleted successfully"}


# ========================
# Tag assignment
# ========================

@router.post("/{contact_id}/tags/{tag_id}", response_model=Message)
async def tag_contact(
    contact_id: str,
    tag_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    link = await TagService(session).tag_contact(
        parse_id(contact_id, "Contact"), parse_id(tag_id, "Tag"), user.id
    )
    if not link:
        raise HTTPException(status_code=404, detail="Contact or tag not found")
    return {"message": "Tag added"}


@router.delete("/{contact_id}/tags/{tag_id}", response_model=Message)
async def untag_contact(
    contact_id: str,
    tag_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    removed = await TagService(session).untag_contact(
        parse_id(contact_id, "Contact"), parse_id(tag_id, "Tag"), user.id
    )
    if not removed:
        raise HTTPException(status_code=404, detail="Tag not attached to contact")
    return {"message": "Tag removed"}
