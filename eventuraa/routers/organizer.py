"""
Organizer-side event management. New events start pending review; the
organizer sees all of their own events whatever the approval state.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from eventuraa.database import get_db
from eventuraa.models.event import ApprovalStatus
from eventuraa.resources import ResourceType
from eventuraa.schemas.events import EventCreate, EventUpdate, EventResponse
from eventuraa.schemas.moderation import ActiveUpdate
from eventuraa.auth.dependencies import require_organizer
from eventuraa.auth.session import AuthSession
from eventuraa.services import moderation
from eventuraa.services.listing import EVENT_VIEW, filter_and_sort

router = APIRouter(prefix="/organizer/events", tags=["Organizer"])


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    data: EventCreate,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_organizer),
):
    return moderation.create_resource(db, ResourceType.EVENTS, session.actor, data.model_dump())


@router.get("", response_model=List[EventResponse])
def list_my_events(
    status_filter: Optional[ApprovalStatus] = Query(None, alias="status"),
    search: str = Query("", description="Case-insensitive match on title, category, city, venue"),
    sort: str = Query("recent"),
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_organizer),
):
    scope = moderation.ListScope(owner_id=session.actor_id, approval_status=status_filter)
    events = moderation.list_moderable(db, ResourceType.EVENTS, session.actor, scope)
    try:
        return filter_and_sort(events, search, sort, EVENT_VIEW)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: int,
    data: EventUpdate,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_organizer),
):
    return moderation.update_resource(
        db, ResourceType.EVENTS, event_id, session.actor, data.model_dump(exclude_unset=True)
    )


@router.patch("/{event_id}/active", response_model=EventResponse)
def set_event_active(
    event_id: int,
    data: ActiveUpdate,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_organizer),
):
    return moderation.set_active(db, ResourceType.EVENTS, event_id, session.actor, data.is_active)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: int,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_organizer),
):
    moderation.delete_resource(db, ResourceType.EVENTS, event_id, session.actor)
