import uuid
from sqlalchemy import Column, String, Text, Integer, ForeignKey, TIMESTAMP, Uuid, CheckConstraint, func
from network_crm.db.base import Base, utcnow

class Relationship(Base):
    """Directed edge between two contacts of the same user."""
    __tablename__ = "relationships"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    from_contact_id = Column(Uuid, ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False, index=True)
    to_contact_id = Column(Uuid, ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False, index=True)
    relationship_type = Column(String(100))
    strength = Column(Integer, nullable=False, default=1, server_default="1")
    notes = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())

    __table_args__ = (
        CheckConstraint("strength BETWEEN 1 AND 5", name="ck_relationships_strength"),
    )
