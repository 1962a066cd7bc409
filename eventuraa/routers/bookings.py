"""
Bookings: customers book listed venues; venue hosts review bookings and
customers across their own venues with search and sort.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from eventuraa.database import get_db
from eventuraa.schemas.bookings import BookingCreate, BookingResponse, CustomerSummary
from eventuraa.auth.dependencies import require_customer, require_venue_host
from eventuraa.auth.session import AuthSession
from eventuraa.services import bookings as booking_service
from eventuraa.services.listing import BOOKING_VIEW, CUSTOMER_VIEW, filter_and_sort

router = APIRouter(tags=["Bookings"])


@router.post("/bookings", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_customer),
):
    booking = booking_service.create_booking(db, session.actor, data.model_dump())
    return booking_service.booking_summaries([booking])[0]


@router.get("/bookings/mine", response_model=List[BookingResponse])
def list_my_bookings(
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_customer),
):
    return booking_service.booking_summaries(booking_service.list_user_bookings(db, session.actor))


@router.get("/venue-host/bookings", response_model=List[BookingResponse])
def list_host_bookings(
    venue_id: Optional[int] = Query(None, description="Only bookings for this venue"),
    search: str = Query(""),
    sort: str = Query("recent"),
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_venue_host),
):
    rows = booking_service.booking_summaries(
        booking_service.list_host_bookings(db, session.actor, venue_id)
    )
    try:
        return filter_and_sort(rows, search, sort, BOOKING_VIEW)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/venue-host/customers", response_model=List[CustomerSummary])
def list_host_customers(
    venue_id: Optional[int] = Query(None, description="Only customers of this venue"),
    search: str = Query("", description="Matches first name, last name, email or phone"),
    sort: str = Query("recent"),
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_venue_host),
):
    rows = booking_service.customer_summaries(
        booking_service.list_host_bookings(db, session.actor, venue_id)
    )
    try:
        return filter_and_sort(rows, search, sort, CUSTOMER_VIEW)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
