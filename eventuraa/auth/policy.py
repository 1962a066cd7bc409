"""
Role-scoped authorization for moderable resources (events and venues).

Rules are evaluated in order and the first match wins:

1. an admin lacking the permission the operation needs is refused;
2. moderation by anyone but an admin is refused;
3. moderation by an admin that passed rule 1 is allowed;
4. the owning actor may create, read, update and delete its own resource;
5. anyone, anonymous included, may read a publicly visible resource;
6. an admin holding the resource type's permission may read anything;
7. everything else is refused. Anonymous writes are Unauthenticated;
   refusals on resources the caller cannot see are reported as NotFound
   so existence does not leak.

visibility_clause() is the same rule set expressed as a query filter for
list endpoints.
"""
import enum
from typing import Optional

from sqlalchemy import and_, or_, true

from eventuraa.auth.session import Actor, AdminActor
from eventuraa.models import ApprovalStatus, Permission
from eventuraa.resources import ResourceKind, ResourceType, kind_of
from eventuraa.services.errors import Forbidden, NotFound, Unauthenticated


class Operation(str, enum.Enum):
    READ_LIST = "read_list"
    READ_ONE = "read_one"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    MODERATE = "moderate"


READ_OPERATIONS = frozenset({Operation.READ_LIST, Operation.READ_ONE})
OWNER_OPERATIONS = frozenset({Operation.CREATE, Operation.UPDATE, Operation.DELETE})


def is_publicly_visible(resource) -> bool:
    return resource.approval_status == ApprovalStatus.APPROVED and resource.is_active is True


def required_permission(kind: ResourceKind, operation: Operation) -> Optional[Permission]:
    """Permission an admin needs for the operation. Public reads need none."""
    if operation in READ_OPERATIONS:
        return None
    return kind.permission


def is_owner(actor: Optional[Actor], kind: ResourceKind, resource) -> bool:
    if actor is None or resource is None:
        return False
    return actor.role == kind.owner_role and kind.owner_id(resource) == actor.id


def can_see(actor: Optional[Actor], kind: ResourceKind, resource) -> bool:
    if is_publicly_visible(resource) or is_owner(actor, kind, resource):
        return True
    return isinstance(actor, AdminActor) and actor.has_permission(kind.permission)


def authorize(
    actor: Optional[Actor],
    operation: Operation,
    resource_type: ResourceType,
    resource=None,
) -> None:
    """Raise Unauthenticated, Forbidden or NotFound unless the actor may perform the operation."""
    kind = kind_of(resource_type)

    if isinstance(actor, AdminActor):
        permission = required_permission(kind, operation)
        if permission is not None and not actor.has_permission(permission):
            raise Forbidden(f"Access denied. Missing permission: {permission.value}")

    if operation == Operation.MODERATE:
        if not isinstance(actor, AdminActor):
            raise Forbidden("Access denied. Admin privileges required.")
        return

    if actor is None and operation in OWNER_OPERATIONS:
        raise Unauthenticated("Authentication required")

    if is_owner(actor, kind, resource):
        return

    if operation in READ_OPERATIONS:
        # Lists are narrowed per record by visibility_clause
        if resource is None:
            return
        if is_publicly_visible(resource):
            return
        if isinstance(actor, AdminActor) and actor.has_permission(kind.permission):
            return

    if operation == Operation.CREATE or resource is None or can_see(actor, kind, resource):
        raise Forbidden(f"Not authorized to {operation.value.replace('_', ' ')} this {kind.label.lower()}")
    raise NotFound(f"{kind.label} not found")


def visibility_clause(actor: Optional[Actor], resource_type: ResourceType):
    """SQL filter selecting the records of resource_type the actor may read."""
    kind = kind_of(resource_type)
    model = kind.model

    if isinstance(actor, AdminActor) and actor.has_permission(kind.permission):
        return true()

    public = and_(model.approval_status == ApprovalStatus.APPROVED, model.is_active == True)
    if actor is not None and actor.role == kind.owner_role:
        return or_(public, kind.owner_column == actor.id)
    return public
