from sqlalchemy import Column, Integer, String, DateTime, Enum, Boolean, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum

from .base import Base


class UserRole(str, enum.Enum):
    """Account kind. Every actor of the marketplace lives in the users table."""
    USER = "user"
    DOCTOR = "doctor"
    ORGANIZER = "organizer"
    VENUE_HOST = "venue_host"
    ADMIN = "admin"


class AdminLevel(str, enum.Enum):
    SUPERADMIN = "superadmin"
    MANAGER = "manager"
    SUPPORT = "support"
    CONTENT = "content"


class Permission(str, enum.Enum):
    """Fine-grained admin permissions"""
    MANAGE_USERS = "manage_users"
    MANAGE_ORGANIZERS = "manage_organizers"
    MANAGE_DOCTORS = "manage_doctors"
    MANAGE_EVENTS = "manage_events"
    MANAGE_VENUES = "manage_venues"
    MANAGE_VENUE_HOSTS = "manage_venue_hosts"
    MANAGE_CONTENT = "manage_content"
    MANAGE_ADMINS = "manage_admins"
    VIEW_REPORTS = "view_reports"
    FINANCIAL_ACCESS = "financial_access"


class User(Base):
    """Account model for authentication and authorization"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.USER, index=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=True)
    company_name = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    # Admin-only fields
    admin_level = Column(Enum(AdminLevel), nullable=True)
    permissions = Column(JSON, nullable=False, default=list)

    # Relationships
    events = relationship("Event", back_populates="organizer", cascade="all, delete-orphan")
    venues = relationship("Venue", back_populates="venue_host", cascade="all, delete-orphan")
    bookings = relationship("Booking", back_populates="user")
