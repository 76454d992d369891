import uuid
from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator
from network_crm.config.constants import MAX_SUBJECT_LENGTH
from network_crm.models.interaction import InteractionOutcome
from network_crm.schemas.common import CamelModel, CamelInput, reject_explicit_null


class InteractionCreate(CamelInput):
    contact_id: uuid.UUID
    type: str = Field(min_length=1, max_length=50)
    subject: Optional[str] = Field(None, max_length=MAX_SUBJECT_LENGTH)
    notes: Optional[str] = None
    outcome: Optional[InteractionOutcome] = None
    follow_up_required: Optional[datetime] = None

    @field_validator("type")
    @classmethod
    def normalize_type(cls, v):
        return v.lower()


class InteractionPatch(CamelInput):
    contact_id: Optional[uuid.UUID] = None
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    subject: Optional[str] = Field(None, max_length=MAX_SUBJECT_LENGTH)
    notes: Optional[str] = None
    outcome: Optional[InteractionOutcome] = None
    follow_up_required: Optional[datetime] = None

    @field_validator("contact_id", "type")
    @classmethod
    def reject_null(cls, v, info):
        return reject_explicit_null(v, info)

    @field_validator("type")
    @classmethod
    def normalize_type(cls, v):
        return v.lower() if v else v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class InteractionRead(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    contact_id: uuid.UUID
    type: str
    subject: Optional[str] = None
    notes: Optional[str] = None
    outcome: Optional[str] = None
    follow_up_required: Optional[datetime] = None
    created_at: Optional[datetime] = None
