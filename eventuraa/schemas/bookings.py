from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional
from eventuraa.models.booking import BookingStatus


class BookingCreate(BaseModel):
    venue_id: int
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=32)
    check_in: datetime
    check_out: datetime
    guests: int = Field(1, ge=1)


class BookingResponse(BaseModel):
    id: int
    booking_reference: str
    venue_id: int
    venue_name: Optional[str] = None
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    check_in: datetime
    check_out: datetime
    guests: int
    total_price: float
    status: BookingStatus
    created_at: datetime

    class Config:
        from_attributes = True


class CustomerSummary(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    bookings_count: int
    last_booking: Optional[datetime] = None
    total_spent: float
