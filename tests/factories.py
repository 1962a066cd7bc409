"""Attribute-complete stand-ins for ORM rows and Redis used by tests"""
from datetime import datetime
from unittest.mock import Mock

from eventuraa.models import Event, Venue, User, UserRole, ApprovalStatus, VenueType


def mock_event(id=1, organizer_id=10, status=ApprovalStatus.PENDING, is_active=True, featured=False,
               title="Perahera Night", rejection_reason=None):
    event = Mock(spec=Event)
    event.id = id
    event.organizer_id = organizer_id
    event.title = title
    event.description = "Evening procession"
    event.category = "culture"
    event.event_type = "festival"
    event.starts_at = datetime(2026, 8, 1, 18, 0, 0)
    event.ends_at = None
    event.location_name = "Temple Square"
    event.city = "Kandy"
    event.district = "Kandy"
    event.ticket_price = 1500.0
    event.tickets_available = 100
    event.tickets_sold = 0
    event.cover_image = None
    event.approval_status = status
    event.rejection_reason = rejection_reason
    event.is_active = is_active
    event.featured = featured
    event.created_at = datetime(2026, 1, 1, 0, 0, 0)
    event.updated_at = datetime(2026, 1, 1, 0, 0, 0)
    return event


def mock_venue(id=1, venue_host_id=20, status=ApprovalStatus.PENDING, is_active=True, featured=False,
               name="Lagoon Villa", price_min=20000.0):
    venue = Mock(spec=Venue)
    venue.id = id
    venue.venue_host_id = venue_host_id
    venue.name = name
    venue.venue_type = VenueType.HOTEL
    venue.location = "Negombo"
    venue.description = None
    venue.city = "Negombo"
    venue.district = "Gampaha"
    venue.capacity_min = 1
    venue.capacity_max = 10
    venue.price_min = price_min
    venue.price_max = None
    venue.currency = "LKR"
    venue.image_url = None
    venue.approval_status = status
    venue.rejection_reason = None
    venue.is_active = is_active
    venue.featured = featured
    venue.created_at = datetime(2026, 1, 1, 0, 0, 0)
    venue.updated_at = datetime(2026, 1, 1, 0, 0, 0)
    return venue


def mock_user(id=30, role=UserRole.USER, email="guest@test.com", name="Guest", is_active=True,
              permissions=None, admin_level=None):
    user = Mock(spec=User)
    user.id = id
    user.email = email
    user.name = name
    user.role = role
    user.phone = None
    user.company_name = None
    user.is_active = is_active
    user.admin_level = admin_level
    user.permissions = permissions or []
    user.password_hash = "$2b$12$test_hash"
    user.created_at = datetime(2026, 1, 1, 0, 0, 0)
    user.last_login_at = None
    return user


class InMemoryRedis:
    """Just enough of the redis client for the cache and the logout deny-list"""

    def __init__(self):
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value, ex=None):
        self.data[key] = value

    def exists(self, key):
        return int(key in self.data)

    def incr(self, key):
        self.data[key] = str(int(self.data.get(key) or 0) + 1)
        return int(self.data[key])
