import uuid
import enum
from sqlalchemy import Column, String, Text, ForeignKey, TIMESTAMP, Uuid, Index, func
from sqlalchemy.orm import relationship
from network_crm.db.base import Base, utcnow

class InteractionType(str, enum.Enum):
    MEETING = "meeting"
    CALL = "call"
    EMAIL = "email"
    MESSAGE = "message"
    EVENT = "event"
    COFFEE = "coffee"
    CONFERENCE = "conference"

class InteractionOutcome(str, enum.Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"

class Interaction(Base):
    __tablename__ = "interactions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    contact_id = Column(Uuid, ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    subject = Column(String(255))
    notes = Column(Text)
    outcome = Column(String(20))
    follow_up_required = Column(TIMESTAMP(timezone=True))
    # Immutable once written
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    contact = relationship("Contact", back_populates="interactions")

    __table_args__ = (
        Index("ix_interaction_contact_created", "contact_id", "created_at"),
        Index("ix_interaction_user_created", "user_id", "created_at"),
    )
