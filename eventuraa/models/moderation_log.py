import enum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from .base import Base


class ModerationAction(str, enum.Enum):
    APPROVED = "approved"
    REJECTED = "rejected"
    ACTIVATED = "activated"
    DEACTIVATED = "deactivated"
    FEATURED = "featured"
    UNFEATURED = "unfeatured"
    REQUEUED = "requeued"


class ModerationLog(Base):
    """Append-only log of moderation actions on events and venues"""
    __tablename__ = "moderation_log"

    id = Column(Integer, primary_key=True, index=True)
    action = Column(Enum(ModerationAction), nullable=False, index=True)
    resource_type = Column(String(20), nullable=False, index=True)
    resource_id = Column(Integer, nullable=False, index=True)
    actor_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    payload = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    actor = relationship("User", foreign_keys=[actor_id])
