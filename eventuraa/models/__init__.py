# Database models
from .base import Base
from .user import User, UserRole, AdminLevel, Permission
from .event import Event, ApprovalStatus
from .venue import Venue, VenueType
from .booking import Booking, BookingStatus
from .moderation_log import ModerationLog, ModerationAction

__all__ = [
    "Base",
    "User",
    "UserRole",
    "AdminLevel",
    "Permission",
    "Event",
    "ApprovalStatus",
    "Venue",
    "VenueType",
    "Booking",
    "BookingStatus",
    "ModerationLog",
    "ModerationAction",
]
