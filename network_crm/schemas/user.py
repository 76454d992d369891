from typing import Optional
from pydantic import Field
from network_crm.schemas.common import CamelInput


class UserCreate(CamelInput):
    username: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=1)
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

