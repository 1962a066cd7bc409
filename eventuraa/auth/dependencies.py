from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from eventuraa.database import get_db
from eventuraa.models.user import User, UserRole, Permission
from eventuraa.auth.security import verify_token
from eventuraa.auth.revocation import is_revoked
from eventuraa.auth.session import AuthSession, AdminActor, actor_from_user

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def _resolve_session(token: str, db: Session) -> AuthSession:
    payload = verify_token(token, expected_type="access")

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    token_id = payload.get("jti")
    if user_id is None or token_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    if is_revoked(token_id):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session has been logged out",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive. Please contact support.",
        )

    return AuthSession(
        actor=actor_from_user(user),
        token_id=token_id,
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


async def get_current_session(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> AuthSession:
    """Dependency to get the authenticated session from the bearer token"""
    return _resolve_session(credentials.credentials, db)


async def get_optional_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
    db: Session = Depends(get_db),
) -> Optional[AuthSession]:
    """Like get_current_session, but anonymous callers get None instead of a 401"""
    if credentials is None:
        return None
    return _resolve_session(credentials.credentials, db)


def require_role(*allowed_roles: UserRole):
    """Factory to create role-based access control dependency"""
    async def role_checker(session: AuthSession = Depends(get_current_session)) -> AuthSession:
        if session.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required roles: {', '.join(r.value for r in allowed_roles)}"
            )
        return session
    return role_checker


def require_permission(*permissions: Permission):
    """Factory for admin routes that need every listed permission"""
    async def permission_checker(session: AuthSession = Depends(get_current_session)) -> AuthSession:
        actor = session.actor
        if not isinstance(actor, AdminActor):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied. Admin privileges required.",
            )
        missing = [p.value for p in permissions if not actor.has_permission(p)]
        if missing:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Missing permissions: {', '.join(missing)}",
            )
        return session
    return permission_checker


# Convenience dependencies for common role checks
require_admin = require_role(UserRole.ADMIN)
require_organizer = require_role(UserRole.ORGANIZER)
require_venue_host = require_role(UserRole.VENUE_HOST)
require_customer = require_role(UserRole.USER)
