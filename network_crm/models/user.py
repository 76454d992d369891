import uuid
from sqlalchemy import Column, String, Text, TIMESTAMP, Uuid, func
from network_crm.db.base import Base, utcnow

class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(150), nullable=False, unique=True)
    password = Column(Text, nullable=False)  # opaque, never returned by the API
    email = Column(String(255))
    first_name = Column(String(255))
    last_name = Column(String(255))
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())
