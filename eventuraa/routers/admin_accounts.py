"""
Admin account management, user directory and dashboard counters.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from eventuraa.database import get_db
from eventuraa.models import Event, Venue, ApprovalStatus
from eventuraa.models.user import User, UserRole, Permission
from eventuraa.schemas.admin import (
    AdminAccountCreate,
    AdminAccountResponse,
    PermissionsUpdate,
    DashboardStats,
)
from eventuraa.schemas.auth import UserResponse
from eventuraa.auth.dependencies import require_permission
from eventuraa.auth.security import hash_password
from eventuraa.auth.session import AuthSession, AdminActor
from eventuraa.services.listing import USER_VIEW, filter_and_sort

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin Accounts"])

admins_only = require_permission(Permission.MANAGE_ADMINS)
users_only = require_permission(Permission.MANAGE_USERS)
reports_only = require_permission(Permission.VIEW_REPORTS)

# Permission needed to (de)activate an account of each role
ROLE_PERMISSIONS = {
    UserRole.USER: Permission.MANAGE_USERS,
    UserRole.DOCTOR: Permission.MANAGE_DOCTORS,
    UserRole.ORGANIZER: Permission.MANAGE_ORGANIZERS,
    UserRole.VENUE_HOST: Permission.MANAGE_VENUE_HOSTS,
    UserRole.ADMIN: Permission.MANAGE_ADMINS,
}


@router.get("/accounts", response_model=List[AdminAccountResponse])
def list_admins(
    db: Session = Depends(get_db),
    _: AuthSession = Depends(admins_only),
):
    return (
        db.query(User)
        .filter(User.role == UserRole.ADMIN)
        .order_by(User.created_at.desc())
        .all()
    )


@router.post("/accounts", response_model=AdminAccountResponse, status_code=status.HTTP_201_CREATED)
def create_admin(
    data: AdminAccountCreate,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(admins_only),
):
    """Create an admin account with an explicit permission set."""
    if db.query(User).filter(User.email == data.email).first():
        raise HTTPException(status_code=400, detail="Email already registered")

    admin = User(
        email=data.email,
        password_hash=hash_password(data.password),
        role=UserRole.ADMIN,
        name=data.name,
        phone=data.phone,
        admin_level=data.admin_level,
        permissions=sorted({p.value for p in data.permissions}),
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)

    logger.info("Admin account %s created by admin %s", admin.id, session.actor_id)
    return admin


@router.patch("/accounts/{admin_id}/permissions", response_model=AdminAccountResponse)
def update_permissions(
    admin_id: int,
    data: PermissionsUpdate,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(admins_only),
):
    admin = db.query(User).filter(User.id == admin_id, User.role == UserRole.ADMIN).first()
    if admin is None:
        raise HTTPException(status_code=404, detail="Admin not found")
    if admin.id == session.actor_id and Permission.MANAGE_ADMINS not in data.permissions:
        raise HTTPException(status_code=400, detail="Cannot remove manage_admins from your own account")

    admin.permissions = sorted({p.value for p in data.permissions})
    db.commit()
    db.refresh(admin)

    logger.info("Permissions of admin %s set to %s by admin %s", admin.id, admin.permissions, session.actor_id)
    return admin


@router.get("/users", response_model=List[UserResponse])
def list_users(
    role: Optional[UserRole] = Query(None),
    search: str = Query(""),
    sort: str = Query("recent"),
    db: Session = Depends(get_db),
    _: AuthSession = Depends(users_only),
):
    """Non-admin accounts, optionally of a single role."""
    query = db.query(User).filter(User.role != UserRole.ADMIN)
    if role is not None:
        query = query.filter(User.role == role)
    try:
        return filter_and_sort(query.all(), search, sort, USER_VIEW)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/users/{user_id}/toggle-status", response_model=UserResponse)
def toggle_user_status(
    user_id: int,
    db: Session = Depends(get_db),
    session: AuthSession = Depends(require_permission()),
):
    """Flip is_active. The permission needed depends on the target's role."""
    actor: AdminActor = session.actor
    if not any(actor.has_permission(p) for p in ROLE_PERMISSIONS.values()):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Account management permission required.",
        )

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")

    permission = ROLE_PERMISSIONS[UserRole(user.role)]
    if not actor.has_permission(permission):
        # Without the user directory, an account out of reach looks missing
        if not actor.has_permission(Permission.MANAGE_USERS):
            raise HTTPException(status_code=404, detail="User not found")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Access denied. Missing permission: {permission.value}",
        )
    if user.id == session.actor_id:
        raise HTTPException(status_code=400, detail="Cannot deactivate your own account")

    user.is_active = not user.is_active
    db.commit()
    db.refresh(user)

    logger.info("User %s %s by admin %s", user.id, "activated" if user.is_active else "deactivated", session.actor_id)
    return user


@router.get("/dashboard-stats", response_model=DashboardStats)
def dashboard_stats(
    db: Session = Depends(get_db),
    _: AuthSession = Depends(reports_only),
):
    """Account counts per role and the size of both review queues."""
    counts = {role.value: 0 for role in UserRole}
    active = {role.value: 0 for role in UserRole}

    rows = db.query(User.role, User.is_active, func.count(User.id)).group_by(User.role, User.is_active).all()
    for role, is_active, count in rows:
        key = UserRole(role).value
        counts[key] += count
        if is_active:
            active[key] += count

    pending = {
        "events": db.query(Event).filter(Event.approval_status == ApprovalStatus.PENDING).count(),
        "venues": db.query(Venue).filter(Venue.approval_status == ApprovalStatus.PENDING).count(),
    }
    return DashboardStats(counts=counts, active=active, pending=pending)
