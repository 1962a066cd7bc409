"""End-to-end: an organizer's event only reaches the public listing once approved"""
from datetime import datetime, timezone
from unittest.mock import patch

from eventuraa.auth.session import AdminActor, OrganizerActor
from eventuraa.models import ApprovalStatus, Permission
from eventuraa.resources import ResourceType
from eventuraa.services import moderation


def test_event_is_public_only_after_approval(sqlite_db):
    organizer = OrganizerActor(id=10)
    admin = AdminActor(id=1, permissions=frozenset({Permission.MANAGE_EVENTS}))

    with patch("eventuraa.services.moderation.listing_cache"), \
         patch("eventuraa.services.moderation.notify_moderation_outcome") as outcome:
        event = moderation.create_resource(sqlite_db, ResourceType.EVENTS, organizer, {
            "title": "Galle Literary Walk",
            "description": "Guided walk through the fort",
            "category": "culture",
            "event_type": "tour",
            "starts_at": datetime(2026, 11, 5, 9, 0, tzinfo=timezone.utc),
            "location_name": "Galle Fort",
            "city": "Galle",
            "district": "Galle",
            "ticket_price": 2500,
            "tickets_available": 20,
        })
        assert event.approval_status == ApprovalStatus.PENDING

        before = moderation.list_moderable(sqlite_db, ResourceType.EVENTS, None)
        assert event.id not in [e.id for e in before]

        # The organizer still sees it in their own dashboard
        own = moderation.list_moderable(
            sqlite_db, ResourceType.EVENTS, organizer, moderation.ListScope(owner_id=organizer.id)
        )
        assert [e.id for e in own] == [event.id]

        moderation.approve(sqlite_db, ResourceType.EVENTS, event.id, admin)

        after = moderation.list_moderable(sqlite_db, ResourceType.EVENTS, None)
        assert [e.id for e in after] == [event.id]
        outcome.assert_called_once()
