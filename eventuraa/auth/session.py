"""
Actors and the per-request authentication session.

An Actor is a tagged union over account kinds. Only AdminActor carries a
permission set, so permission checks can only ever be asked of an admin.
Anonymous callers are represented as None.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import FrozenSet, Optional, Union

from eventuraa.models.user import User, UserRole, AdminLevel, Permission


@dataclass(frozen=True)
class UserActor:
    id: int
    role = UserRole.USER


@dataclass(frozen=True)
class DoctorActor:
    id: int
    role = UserRole.DOCTOR


@dataclass(frozen=True)
class OrganizerActor:
    id: int
    role = UserRole.ORGANIZER


@dataclass(frozen=True)
class VenueHostActor:
    id: int
    role = UserRole.VENUE_HOST


@dataclass(frozen=True)
class AdminActor:
    id: int
    permissions: FrozenSet[Permission] = field(default_factory=frozenset)
    superadmin: bool = False
    role = UserRole.ADMIN

    def has_permission(self, permission: Permission) -> bool:
        return self.superadmin or permission in self.permissions


Actor = Union[UserActor, DoctorActor, OrganizerActor, VenueHostActor, AdminActor]

_ACTOR_CLASSES = {
    UserRole.USER: UserActor,
    UserRole.DOCTOR: DoctorActor,
    UserRole.ORGANIZER: OrganizerActor,
    UserRole.VENUE_HOST: VenueHostActor,
}


def actor_from_user(user: User) -> Actor:
    """Build the actor value for a stored account."""
    if user.role == UserRole.ADMIN:
        permissions = set()
        for name in user.permissions or []:
            try:
                permissions.add(Permission(name))
            except ValueError:
                # Permissions dropped from the enum stay in old rows
                continue
        return AdminActor(
            id=user.id,
            permissions=frozenset(permissions),
            superadmin=user.admin_level == AdminLevel.SUPERADMIN,
        )
    return _ACTOR_CLASSES[UserRole(user.role)](id=user.id)


@dataclass(frozen=True)
class AuthSession:
    """Authenticated session resolved from a bearer token"""
    actor: Actor
    token_id: str
    expires_at: datetime

    @property
    def actor_id(self) -> int:
        return self.actor.id

    @property
    def role(self) -> UserRole:
        return self.actor.role


def actor_of(session: Optional[AuthSession]) -> Optional[Actor]:
    return session.actor if session is not None else None
