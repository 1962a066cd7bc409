"""
Public event listing. Only approved and active events appear here; a single
event can also be previewed by its organizer or an admin before approval.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from eventuraa.database import get_db
from eventuraa.models.event import Event
from eventuraa.resources import ResourceType
from eventuraa.schemas.events import EventResponse
from eventuraa.auth.dependencies import get_optional_session
from eventuraa.auth.session import AuthSession, actor_of
from eventuraa.services import moderation
from eventuraa.services.listing_cache import listing_cache

router = APIRouter(prefix="/events", tags=["Events"])


@router.get("", response_model=List[EventResponse])
def list_public_events(
    organizer_id: Optional[int] = Query(None, description="Only events by this organizer"),
    featured: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
):
    """Upcoming-first public listing, identical for every caller."""
    scope = moderation.ListScope(owner_id=organizer_id, featured=featured)
    version = listing_cache.version(ResourceType.EVENTS.value)
    cached = listing_cache.get(ResourceType.EVENTS.value, scope.cache_key(), version)
    if cached is not None:
        return cached

    events = moderation.list_moderable(db, ResourceType.EVENTS, None, scope, order_by=Event.starts_at.asc())
    items = [EventResponse.model_validate(e).model_dump(mode="json") for e in events]
    listing_cache.set(ResourceType.EVENTS.value, scope.cache_key(), items, version)
    return items


@router.get("/{event_id}", response_model=EventResponse)
def get_event(
    event_id: int,
    db: Session = Depends(get_db),
    session: Optional[AuthSession] = Depends(get_optional_session),
):
    return moderation.get_moderable(db, ResourceType.EVENTS, event_id, actor_of(session))
