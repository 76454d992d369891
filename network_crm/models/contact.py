import uuid
import enum
from sqlalchemy import Column, String, Text, Integer, ForeignKey, TIMESTAMP, Uuid, CheckConstraint, Index, func
from sqlalchemy.orm import relationship
from network_crm.db.base import Base, utcnow

class ContactCategory(str, enum.Enum):
    WORK = "work"
    CLIENT = "client"
    PROSPECT = "prospect"
    FAMILY = "family"
    FRIEND = "friend"
    MENTOR = "mentor"
    VENDOR = "vendor"
    PARTNER = "partner"
    OTHER = "other"

class ContactSource(str, enum.Enum):
    CONFERENCE = "conference"
    REFERRAL = "referral"
    LINKEDIN = "linkedin"
    WORK = "work"
    SOCIAL = "social"
    OTHER = "other"

class Contact(Base):
    __tablename__ = "contacts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255))
    phone = Column(String(50))
    company = Column(String(255))
    title = Column(String(255))
    location = Column(String(255))
    linkedin_url = Column(String(500))
    category = Column(String(50), nullable=False)
    relationship_strength = Column(Integer, nullable=False, default=1, server_default="1")
    contact_source = Column(String(100))
    notes = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())
    # Refreshed explicitly by the services on edits and on new interactions
    updated_at = Column(TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow, server_default=func.now())

    interactions = relationship(
        "Interaction",
        back_populates="contact",
        order_by="Interaction.created_at.desc()",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    tags = relationship("Tag", secondary="contact_tags", order_by="Tag.name", viewonly=True)

    __table_args__ = (
        CheckConstraint("relationship_strength BETWEEN 1 AND 5", name="ck_contacts_relationship_strength"),
        Index("ix_contact_user_updated", "user_id", "updated_at"),
    )
