import uuid
from datetime import datetime
from typing import Optional
from pydantic import Field, model_validator
from network_crm.config.constants import MIN_RELATIONSHIP_STRENGTH, MAX_RELATIONSHIP_STRENGTH
from network_crm.schemas.common import CamelModel, CamelInput


class RelationshipCreate(CamelInput):
    from_contact_id: uuid.UUID
    to_contact_id: uuid.UUID
    relationship_type: Optional[str] = Field(None, max_length=100)
    strength: int = Field(1, ge=MIN_RELATIONSHIP_STRENGTH, le=MAX_RELATIONSHIP_STRENGTH)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_distinct_endpoints(self):
        if self.from_contact_id == self.to_contact_id:
            raise ValueError("a contact cannot be related to itself")
        return self


class RelationshipRead(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    from_contact_id: uuid.UUID
    to_contact_id: uuid.UUID
    relationship_type: Optional[str] = None
    strength: int
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
