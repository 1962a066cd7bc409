"""
Venues: public listing plus venue-host management of their own listings.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from eventuraa.database import get_db
from eventuraa.resources import ResourceType
from eventuraa.schemas.venues import VenueCreate, VenueUpdate, VenueResponse
from eventuraa.schemas.moderation import ActiveUpdate
from eventuraa.auth.dependencies import get_optional_session, require_venue_host
from eventuraa.auth.session import AuthSession, actor_of
from eventuraa.services import moderation
from eventuraa.services.listing import VENUE_VIEW, filter_and_sort
from eventuraa.services.listing_cache import listing_cache

router = APIRouter(prefix="/venues", tags=["Venues"])


@router.get("", response_model=List[VenueResponse])
def list_public_venues(
    venue_host_id: Optional[int] = Query(None, description="Only venues of this host"),
    featured: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
):
    scope = moderation.ListScope(owner_id=venue_host_id, featured=featured)
    version = listing_cache.version(ResourceType.VENUES.value)
    cached = listing_cache.get(ResourceType.VENUES.value, scope.cache_key(), version)
    if cached is not None:
        return cached

    venues = moderation.list_moderable(db, ResourceType.VENUES, None, scope)
    items = [VenueResponse.model_validate(v).model_dump(mode="json") for v in venues]
    listing_cache.set(ResourceType.VENUES.value, scope.cache_key(), items, version)
    return items


@router.get("/my-venues", response_model=List[VenueResponse])
def list_my_venues(
    search: str = Query(""),
    sort: str = Query("recent"),
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_venue_host),
):
    scope = moderation.ListScope(owner_id=session.actor_id)
    venues = moderation.list_moderable(db, ResourceType.VENUES, session.actor, scope)
    try:
        return filter_and_sort(venues, search, sort, VENUE_VIEW)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{venue_id}", response_model=VenueResponse)
def get_venue(
    venue_id: int,
    db: Session = Depends(get_db),
    session: Optional[AuthSession] = Depends(get_optional_session),
):
    return moderation.get_moderable(db, ResourceType.VENUES, venue_id, actor_of(session))


@router.post("", response_model=VenueResponse, status_code=status.HTTP_201_CREATED)
def create_venue(
    data: VenueCreate,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_venue_host),
):
    return moderation.create_resource(db, ResourceType.VENUES, session.actor, data.model_dump())


@router.patch("/{venue_id}", response_model=VenueResponse)
def update_venue(
    venue_id: int,
    data: VenueUpdate,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_venue_host),
):
    return moderation.update_resource(
        db, ResourceType.VENUES, venue_id, session.actor, data.model_dump(exclude_unset=True)
    )


@router.patch("/{venue_id}/active", response_model=VenueResponse)
def set_venue_active(
    venue_id: int,
    data: ActiveUpdate,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_venue_host),
):
    return moderation.set_active(db, ResourceType.VENUES, venue_id, session.actor, data.is_active)


@router.delete("/{venue_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_venue(
    venue_id: int,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_venue_host),
):
    moderation.delete_resource(db, ResourceType.VENUES, venue_id, session.actor)
