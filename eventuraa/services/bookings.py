"""Venue bookings and the venue host's booking and customer views."""
import logging
import secrets
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from eventuraa.auth.session import Actor
from eventuraa.models import Booking, BookingStatus, Venue
from eventuraa.resources import ResourceType
from eventuraa.services.errors import ValidationFailed
from eventuraa.services.moderation import get_moderable

logger = logging.getLogger(__name__)


def generate_booking_reference() -> str:
    return f"BK-{secrets.token_hex(4).upper()}"


def create_booking(db: Session, actor: Actor, data: Dict[str, Any]) -> Booking:
    """Book a publicly listed venue. Unlisted venues look the same as missing ones."""
    venue = get_moderable(db, ResourceType.VENUES, data["venue_id"], None)

    check_in, check_out = data["check_in"], data["check_out"]
    if check_out <= check_in:
        raise ValidationFailed("Check-out must be after check-in")
    if venue.capacity_max and data["guests"] > venue.capacity_max:
        raise ValidationFailed(f"This venue accepts at most {venue.capacity_max} guests")

    nights = max(1, (check_out - check_in).days)
    booking = Booking(
        **data,
        booking_reference=generate_booking_reference(),
        user_id=actor.id,
        total_price=nights * (venue.price_min or 0),
        status=BookingStatus.PENDING,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)

    logger.info("Booking %s created for venue %s by user %s", booking.booking_reference, venue.id, actor.id)
    return booking


def list_user_bookings(db: Session, actor: Actor) -> List[Booking]:
    return (
        db.query(Booking)
        .filter(Booking.user_id == actor.id)
        .order_by(Booking.created_at.desc())
        .all()
    )


def list_host_bookings(db: Session, actor: Actor, venue_id: Optional[int] = None) -> List[Booking]:
    """Bookings across the host's own venues, optionally narrowed to one venue."""
    query = db.query(Booking).join(Venue, Booking.venue_id == Venue.id).filter(Venue.venue_host_id == actor.id)
    if venue_id is not None:
        query = query.filter(Booking.venue_id == venue_id)
    return query.order_by(Booking.created_at.desc()).all()


def booking_summaries(bookings: List[Booking]) -> List[Dict[str, Any]]:
    return [
        {
            "id": b.id,
            "booking_reference": b.booking_reference,
            "venue_id": b.venue_id,
            "venue_name": b.venue.name if b.venue is not None else "",
            "first_name": b.first_name,
            "last_name": b.last_name,
            "email": b.email,
            "phone": b.phone,
            "check_in": b.check_in,
            "check_out": b.check_out,
            "guests": b.guests,
            "total_price": b.total_price,
            "status": b.status,
            "created_at": b.created_at,
        }
        for b in bookings
    ]


def customer_summaries(bookings: List[Booking]) -> List[Dict[str, Any]]:
    """One row per customer email, in order of first appearance."""
    customers: Dict[str, Dict[str, Any]] = {}
    for b in bookings:
        key = b.email.casefold()
        row = customers.get(key)
        if row is None:
            customers[key] = {
                "first_name": b.first_name,
                "last_name": b.last_name,
                "email": b.email,
                "phone": b.phone,
                "bookings_count": 1,
                "last_booking": b.created_at,
                "total_spent": b.total_price or 0,
            }
            continue
        row["bookings_count"] += 1
        row["total_spent"] += b.total_price or 0
        if b.created_at and (row["last_booking"] is None or b.created_at > row["last_booking"]):
            row["last_booking"] = b.created_at
    return list(customers.values())
