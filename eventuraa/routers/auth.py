import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from eventuraa.database import get_db
from eventuraa.models.user import User, UserRole
from eventuraa.schemas.auth import (
    UserRegister,
    UserLogin,
    TokenResponse,
    RefreshTokenRequest,
    LogoutRequest,
    UserResponse,
)
from eventuraa.auth.security import (
    hash_password,
    verify_password,
    create_access_token,
    create_refresh_token,
    verify_token,
)
from eventuraa.auth.dependencies import get_current_session
from eventuraa.auth.rate_limiter import rate_limiter
from eventuraa.auth.revocation import is_revoked, revoke
from eventuraa.auth.session import AuthSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _issue_tokens(user: User) -> TokenResponse:
    claims = {"sub": str(user.id), "role": UserRole(user.role).value}
    return TokenResponse(
        access_token=create_access_token(claims),
        refresh_token=create_refresh_token(claims),
        role=claims["role"],
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserRegister, db: Session = Depends(get_db)):
    """Register a customer, doctor, organizer or venue host account"""
    existing_user = db.query(User).filter(User.email == user_data.email).first()
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    new_user = User(
        email=user_data.email,
        password_hash=hash_password(user_data.password),
        role=UserRole(user_data.role),
        name=user_data.name,
        phone=user_data.phone,
        company_name=user_data.company_name,
        permissions=[],
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    logger.info("Registered %s account %s", user_data.role, new_user.id)
    return _issue_tokens(new_user)


@router.post("/login", response_model=TokenResponse)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Authenticate any account kind and open a session"""
    if rate_limiter.is_blocked(credentials.email):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Too many failed attempts. Please try again in {rate_limiter.window_minutes} minutes."
        )

    user = db.query(User).filter(User.email == credentials.email).first()

    if user is None or not verify_password(credentials.password, user.password_hash):
        attempts = rate_limiter.record_failed_attempt(credentials.email)
        remaining = rate_limiter.max_attempts - attempts
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"X-Remaining-Attempts": str(max(0, remaining))}
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive. Please contact support.",
        )

    rate_limiter.reset(credentials.email)
    user.last_login_at = datetime.now(timezone.utc)
    db.commit()

    return _issue_tokens(user)


def _expiry(payload: dict) -> datetime:
    return datetime.fromtimestamp(payload["exp"], tz=timezone.utc)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(request: RefreshTokenRequest, db: Session = Depends(get_db)):
    """Exchange a refresh token for a new pair. Each refresh token works once."""
    payload = verify_token(request.refresh_token, expected_type="refresh")

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token"
        )

    user_id = payload.get("sub")
    token_id = payload.get("jti")
    if user_id is None or token_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload"
        )

    if is_revoked(token_id):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session has been logged out"
        )

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )

    revoke(token_id, _expiry(payload))
    return _issue_tokens(user)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    request: Optional[LogoutRequest] = None,
    session: AuthSession = Depends(get_current_session),
):
    """End the session: the access token and its refresh token are refused from now on"""
    refresh_payload = None
    if request is not None and request.refresh_token:
        refresh_payload = verify_token(request.refresh_token, expected_type="refresh")
        if refresh_payload is not None and refresh_payload.get("sub") != str(session.actor_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Refresh token belongs to another account"
            )

    revoke(session.token_id, session.expires_at)
    # An invalid or expired refresh token can no longer be used anyway
    if refresh_payload is not None and refresh_payload.get("jti"):
        revoke(refresh_payload["jti"], _expiry(refresh_payload))


@router.get("/me", response_model=UserResponse)
async def me(session: AuthSession = Depends(get_current_session), db: Session = Depends(get_db)):
    user = db.query(User).filter(User.id == session.actor_id).first()
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user
