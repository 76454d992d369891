import uuid
from sqlalchemy import Column, String, ForeignKey, TIMESTAMP, Uuid, UniqueConstraint, func
from network_crm.db.base import Base, utcnow

class Tag(Base):
    __tablename__ = "tags"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    color = Column(String(20), default="#3B82F6", server_default="#3B82F6")
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())

class ContactTag(Base):
    __tablename__ = "contact_tags"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    contact_id = Column(Uuid, ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False, index=True)
    tag_id = Column(Uuid, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("contact_id", "tag_id", name="uq_contact_tag"),
    )
