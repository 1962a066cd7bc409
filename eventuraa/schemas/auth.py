from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Literal
from datetime import datetime


class UserRegister(BaseModel):
    """Schema for self-service registration. Admin accounts are created by admins."""
    email: EmailStr
    password: str = Field(..., min_length=8, description="Password must be at least 8 characters")
    name: str = Field(..., min_length=1, max_length=255)
    role: Literal["user", "doctor", "organizer", "venue_host"] = "user"
    phone: Optional[str] = Field(None, max_length=32)
    company_name: Optional[str] = Field(None, max_length=255)


class UserLogin(BaseModel):
    """Schema for user login"""
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """Schema for token response"""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    role: str


class RefreshTokenRequest(BaseModel):
    """Schema for refresh token request"""
    refresh_token: str


class LogoutRequest(BaseModel):
    """Refresh token to revoke along with the access token"""
    refresh_token: Optional[str] = None


class UserResponse(BaseModel):
    """Schema for account data response"""
    id: int
    email: str
    name: str
    role: str
    phone: Optional[str] = None
    company_name: Optional[str] = None
    is_active: bool
    admin_level: Optional[str] = None
    permissions: List[str] = []
    created_at: datetime
    last_login_at: Optional[datetime] = None

    class Config:
        from_attributes = True
