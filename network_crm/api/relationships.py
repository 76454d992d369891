"""Contact-to-contact relationship endpoints."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from network_crm.api.deps import get_current_user, parse_id
from network_crm.db.session import get_db
from network_crm.models import User
from network_crm.schemas import RelationshipCreate, RelationshipRead, Message
from network_crm.services.relationship_service import RelationshipService

router = APIRouter(prefix="/api/relationships", tags=["relationships"])


@router.get("", response_model=List[RelationshipRead])
async def list_relationships(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    return await RelationshipService(session).list_relationships(user.id)


@router.post("", response_model=RelationshipRead, status_code=201)
async def create_relationship(
    payload: RelationshipCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    relationship = await RelationshipService(session).create_relationship(user.id, payload)
    if not relationship:
        raise HTTPException(status_code=404, detail="Contact not found")
    return relationship


@router.delete("/{relationship_id}", response_model=Message)
async def delete_relationship(
    relationship_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
):
    deleted = await RelationshipService(session).delete_relationship(
        parse_id(relationship_id, "Relationship"), user.id
    )
    if not deleted:
        raise HTTPException(status_code=404, detail="Relationship not found")
    return {"message": "Relationship deleted successfully"}
