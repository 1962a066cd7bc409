from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from eventuraa.models.event import ApprovalStatus


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=100)
    event_type: str = Field(..., min_length=1, max_length=100)
    starts_at: datetime
    ends_at: Optional[datetime] = None
    location_name: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    district: str = Field(..., min_length=1, max_length=100)
    ticket_price: float = Field(0, ge=0)
    tickets_available: int = Field(0, ge=0)
    cover_image: Optional[str] = None


class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    event_type: Optional[str] = Field(None, min_length=1, max_length=100)
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    location_name: Optional[str] = Field(None, min_length=1, max_length=255)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    district: Optional[str] = Field(None, min_length=1, max_length=100)
    ticket_price: Optional[float] = Field(None, ge=0)
    tickets_available: Optional[int] = Field(None, ge=0)
    cover_image: Optional[str] = None


class EventResponse(BaseModel):
    id: int
    organizer_id: int
    title: str
    description: str
    category: str
    event_type: str
    starts_at: datetime
    ends_at: Optional[datetime] = None
    location_name: str
    city: str
    district: str
    ticket_price: float
    tickets_available: int
    tickets_sold: int
    cover_image: Optional[str] = None
    approval_status: ApprovalStatus
    rejection_reason: Optional[str] = None
    is_active: bool
    featured: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
