from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum, Boolean, Float
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum

from .base import Base
from .event import ApprovalStatus


class VenueType(str, enum.Enum):
    RESTAURANT = "restaurant"
    HOTEL = "hotel"
    RESORT = "resort"
    BANQUET_HALL = "banquet_hall"
    CONFERENCE_CENTER = "conference_center"
    OTHER = "other"


class Venue(Base):
    """Hidden-gem venue listed by a venue host"""
    __tablename__ = "venues"

    id = Column(Integer, primary_key=True, index=True)
    venue_host_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    venue_type = Column(Enum(VenueType), nullable=False)
    location = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    district = Column(String(100), nullable=True)
    capacity_min = Column(Integer, nullable=True)
    capacity_max = Column(Integer, nullable=True)
    price_min = Column(Float, nullable=True)
    price_max = Column(Float, nullable=True)
    currency = Column(String(3), nullable=False, default="LKR")
    image_url = Column(String(500), nullable=True)

    # Moderation
    approval_status = Column(Enum(ApprovalStatus), nullable=False, default=ApprovalStatus.PENDING, index=True)
    rejection_reason = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    featured = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    venue_host = relationship("User", back_populates="venues")
    bookings = relationship("Booking", back_populates="venue", cascade="all, delete-orphan")
