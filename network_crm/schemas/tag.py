import re
import uuid
from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator
from network_crm.config.constants import DEFAULT_TAG_COLOR, MAX_TAG_NAME_LENGTH
from network_crm.schemas.common import CamelModel, CamelInput

HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


class TagCreate(CamelInput):
    name: str = Field(min_length=1, max_length=MAX_TAG_NAME_LENGTH)
    color: str = DEFAULT_TAG_COLOR

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        if not HEX_COLOR_RE.match(v):
            raise ValueError(f"Invalid color: {v}")
        return v


class TagRead(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    color: Optional[str] = None
    created_at: Optional[datetime] = None
