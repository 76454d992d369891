import uuid
from datetime import datetime
from typing import List, Optional
from pydantic import Field, field_validator
from network_crm.config.constants import (
    MIN_RELATIONSHIP_STRENGTH,
    MAX_RELATIONSHIP_STRENGTH,
    DEFAULT_RELATIONSHIP_STRENGTH,
    MAX_NAME_LENGTH,
    MAX_EMAIL_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_COMPANY_LENGTH,
    MAX_TITLE_LENGTH,
    MAX_LOCATION_LENGTH,
    MAX_LINKEDIN_URL_LENGTH,
    MAX_CATEGORY_LENGTH,
)
from network_crm.schemas.common import CamelModel, CamelInput, reject_explicit_null
from network_crm.schemas.interaction import InteractionRead
from network_crm.schemas.tag import TagRead


class ContactCreate(CamelInput):
    first_name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    last_name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    category: str = Field(min_length=1, max_length=MAX_CATEGORY_LENGTH)
    email: Optional[str] = Field(None, max_length=MAX_EMAIL_LENGTH)
    phone: Optional[str] = Field(None, max_length=MAX_PHONE_LENGTH)
    company: Optional[str] = Field(None, max_length=MAX_COMPANY_LENGTH)
    title: Optional[str] = Field(None, max_length=MAX_TITLE_LENGTH)
    location: Optional[str] = Field(None, max_length=MAX_LOCATION_LENGTH)
    linkedin_url: Optional[str] = Field(None, max_length=MAX_LINKEDIN_URL_LENGTH)
    relationship_strength: int = Field(
        DEFAULT_RELATIONSHIP_STRENGTH,
        ge=MIN_RELATIONSHIP_STRENGTH,
        le=MAX_RELATIONSHIP_STRENGTH,
    )
    contact_source: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None

    @field_validator("category")
    @classmethod
    def normalize_category(cls, v):
        return v.lower()


class ContactPatch(CamelInput):
    """Partial update: only the keys present in the request are applied."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    last_name: Optional[str] = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    category: Optional[str] = Field(None, min_length=1, max_length=MAX_CATEGORY_LENGTH)
    email: Optional[str] = Field(None, max_length=MAX_EMAIL_LENGTH)
    phone: Optional[str] = Field(None, max_length=MAX_PHONE_LENGTH)
    company: Optional[str] = Field(None, max_length=MAX_COMPANY_LENGTH)
    title: Optional[str] = Field(None, max_length=MAX_TITLE_LENGTH)
    location: Optional[str] = Field(None, max_length=MAX_LOCATION_LENGTH)
    linkedin_url: Optional[str] = Field(None, max_length=MAX_LINKEDIN_URL_LENGTH)
    relationship_strength: Optional[int] = Field(
        None,
        ge=MIN_RELATIONSHIP_STRENGTH,
        le=MAX_RELATIONSHIP_STRENGTH,
    )
    contact_source: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None

    @field_validator("first_name", "last_name", "category", "relationship_strength")
    @classmethod
    def reject_null(cls, v, info):
        return reject_explicit_null(v, info)

    @field_validator("category")
    @classmethod
    def normalize_category(cls, v):
        return v.lower() if v else v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ContactRead(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    title: Optional[str] = None
    location: Optional[str] = None
    linkedin_url: Optional[str] = None
    category: str
    relationship_strength: int
    contact_source: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ContactWithInteractions(ContactRead):
    interactions: List[InteractionRead] = []


class ContactDetail(ContactWithInteractions):
    tags: List[TagRead] = []
