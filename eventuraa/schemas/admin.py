from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional, List, Dict
from eventuraa.models.user import AdminLevel, Permission


class AdminAccountCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    name: str = Field(..., min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=32)
    admin_level: AdminLevel = AdminLevel.MANAGER
    permissions: List[Permission] = [Permission.VIEW_REPORTS]


class PermissionsUpdate(BaseModel):
    permissions: List[Permission]


class AdminAccountResponse(BaseModel):
    id: int
    email: str
    name: str
    phone: Optional[str] = None
    admin_level: Optional[AdminLevel] = None
    permissions: List[str] = []
    is_active: bool
    created_at: datetime
    last_login_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DashboardStats(BaseModel):
    counts: Dict[str, int]
    active: Dict[str, int]
    pending: Dict[str, int]
