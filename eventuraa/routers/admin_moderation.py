"""
Admin review queue for events and venues.

The same endpoints are registered once per resource type:
/admin/events/... needs manage_events, /admin/venues/... needs manage_venues.
Permission checks happen in the moderation service so every caller of it
gets the same rules.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from eventuraa.database import get_db
from eventuraa.models.event import ApprovalStatus
from eventuraa.resources import ResourceType
from eventuraa.schemas.events import EventResponse
from eventuraa.schemas.venues import VenueResponse
from eventuraa.schemas.moderation import ApproveRequest, RejectRequest, ActiveUpdate, FeaturedUpdate
from eventuraa.auth.dependencies import require_admin
from eventuraa.auth.session import AuthSession
from eventuraa.services import moderation
from eventuraa.services.listing import EVENT_VIEW, VENUE_VIEW, filter_and_sort

router = APIRouter(prefix="/admin", tags=["Admin Moderation"])

RESPONSE_MODELS = {
    ResourceType.EVENTS: EventResponse,
    ResourceType.VENUES: VenueResponse,
}

LIST_VIEWS = {
    ResourceType.EVENTS: EVENT_VIEW,
    ResourceType.VENUES: VENUE_VIEW,
}


def _register(resource_type: ResourceType) -> None:
    response_model = RESPONSE_MODELS[resource_type]
    view = LIST_VIEWS[resource_type]
    base = f"/{resource_type.value}"

    @router.get(base, response_model=List[response_model])
    def list_all(
        status_filter: Optional[ApprovalStatus] = Query(None, alias="status"),
        search: str = Query(""),
        sort: str = Query("recent"),
        db: Session = Depends(get_db),
        session: AuthSession = Depends(require_admin),
    ):
        """Everything, including pending and rejected. Newest first by default."""
        scope = moderation.ListScope(approval_status=status_filter)
        items = moderation.list_moderable(db, resource_type, session.actor, scope)
        try:
            return filter_and_sort(items, search, sort, view)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @router.get(f"{base}/pending", response_model=List[response_model])
    def list_pending(
        db: Session = Depends(get_db),
        session: AuthSession = Depends(require_admin),
    ):
        scope = moderation.ListScope(approval_status=ApprovalStatus.PENDING)
        return moderation.list_moderable(db, resource_type, session.actor, scope)

    @router.get(f"{base}/{{resource_id}}", response_model=response_model)
    def get_one(
        resource_id: int,
        db: Session = Depends(get_db),
        session: AuthSession = Depends(require_admin),
    ):
        return moderation.get_moderable(db, resource_type, resource_id, session.actor)

    @router.put(f"{base}/{{resource_id}}/approve", response_model=response_model)
    def approve(
        resource_id: int,
        body: ApproveRequest = ApproveRequest(),
        db: Session = Depends(get_db),
        session: AuthSession = Depends(require_admin),
    ):
        return moderation.approve(
            db, resource_type, resource_id, session.actor,
            featured=body.featured, is_active=body.is_active,
        )

    @router.put(f"{base}/{{resource_id}}/reject", response_model=response_model)
    def reject(
        resource_id: int,
        body: RejectRequest,
        db: Session = Depends(get_db),
        session: AuthSession = Depends(require_admin),
    ):
        return moderation.reject(db, resource_type, resource_id, session.actor, body.rejection_reason)

    @router.patch(f"{base}/{{resource_id}}/active", response_model=response_model)
    def set_active(
        resource_id: int,
        body: ActiveUpdate,
        db: Session = Depends(get_db),
        session: AuthSession = Depends(require_admin),
    ):
        return moderation.set_active(db, resource_type, resource_id, session.actor, body.is_active)

    @router.patch(f"{base}/{{resource_id}}/featured", response_model=response_model)
    def set_featured(
        resource_id: int,
        body: FeaturedUpdate,
        db: Session = Depends(get_db),
        session: AuthSession = Depends(require_admin),
    ):
        return moderation.set_featured(db, resource_type, resource_id, session.actor, body.featured)


for _resource_type in ResourceType:
    _register(_resource_type)
