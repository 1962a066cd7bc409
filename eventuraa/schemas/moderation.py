from pydantic import BaseModel
from datetime import datetime
from typing import Optional, Any, Dict, List
from eventuraa.models.moderation_log import ModerationAction


class ApproveRequest(BaseModel):
    """Optional flags applied together with the approval"""
    featured: Optional[bool] = None
    is_active: Optional[bool] = None


class RejectRequest(BaseModel):
    # Blank reasons are rejected by the service with a 400
    rejection_reason: str = ""


class ActiveUpdate(BaseModel):
    is_active: bool


class FeaturedUpdate(BaseModel):
    featured: bool


class ModerationLogResponse(BaseModel):
    id: int
    action: ModerationAction
    resource_type: str
    resource_id: int
    actor_id: Optional[int] = None
    payload: Dict[str, Any] = {}
    created_at: datetime

    class Config:
        from_attributes = True


class ModerationLogListResponse(BaseModel):
    items: List[ModerationLogResponse]
    total: int
