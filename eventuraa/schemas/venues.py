from pydantic import BaseModel, Field, model_validator
from datetime import datetime
from typing import Optional
from eventuraa.models.event import ApprovalStatus
from eventuraa.models.venue import VenueType


class VenueCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    venue_type: VenueType
    location: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    district: Optional[str] = Field(None, max_length=100)
    capacity_min: Optional[int] = Field(None, ge=0)
    capacity_max: Optional[int] = Field(None, ge=0)
    price_min: Optional[float] = Field(None, ge=0)
    price_max: Optional[float] = Field(None, ge=0)
    currency: str = Field("LKR", min_length=3, max_length=3)
    image_url: Optional[str] = None

    @model_validator(mode="after")
    def check_ranges(self):
        if self.capacity_min is not None and self.capacity_max is not None and self.capacity_min > self.capacity_max:
            raise ValueError("capacity_min cannot exceed capacity_max")
        if self.price_min is not None and self.price_max is not None and self.price_min > self.price_max:
            raise ValueError("price_min cannot exceed price_max")
        return self


class VenueUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    venue_type: Optional[VenueType] = None
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    district: Optional[str] = Field(None, max_length=100)
    capacity_min: Optional[int] = Field(None, ge=0)
    capacity_max: Optional[int] = Field(None, ge=0)
    price_min: Optional[float] = Field(None, ge=0)
    price_max: Optional[float] = Field(None, ge=0)
    image_url: Optional[str] = None


class VenueResponse(BaseModel):
    id: int
    venue_host_id: int
    name: str
    venue_type: VenueType
    location: str
    description: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    capacity_min: Optional[int] = None
    capacity_max: Optional[int] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    currency: str
    image_url: Optional[str] = None
    approval_status: ApprovalStatus
    rejection_reason: Optional[str] = None
    is_active: bool
    featured: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
