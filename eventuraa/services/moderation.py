"""
Moderation workflow for events and venues.

States: pending → approved
        pending → rejected

Nothing leaves approved or rejected, except that an owner edit re-queues the
resource to pending when settings.requeue_on_edit is on.

Every transition is a single compare-and-swap UPDATE guarded by the expected
pre-state, so two admins racing to approve and reject the same item cannot
both win: the loser gets InvalidState. The moderation log row is written in
the same transaction. Owner notification and listing cache invalidation run
after commit and never affect the result.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from eventuraa.auth.policy import Operation, authorize, visibility_clause
from eventuraa.auth.session import Actor, AdminActor
from eventuraa.config import settings
from eventuraa.models import ApprovalStatus, ModerationLog, ModerationAction
from eventuraa.resources import ResourceKind, ResourceType, kind_of
from eventuraa.services.errors import InvalidState, NotFound, ValidationFailed
from eventuraa.services.listing_cache import listing_cache
from eventuraa.services.notifications import notify, notify_moderation_outcome

logger = logging.getLogger(__name__)

# Fields owners may never write directly
PROTECTED_FIELDS = frozenset({
    "id",
    "approval_status",
    "rejection_reason",
    "featured",
    "is_active",
    "created_at",
    "updated_at",
    "organizer_id",
    "venue_host_id",
})


@dataclass(frozen=True)
class ListScope:
    """Narrows a listing. Never widens what the caller may see."""
    owner_id: Optional[int] = None
    approval_status: Optional[ApprovalStatus] = None
    is_active: Optional[bool] = None
    featured: Optional[bool] = None

    def apply(self, query, kind: ResourceKind):
        model = kind.model
        if self.owner_id is not None:
            query = query.filter(kind.owner_column == self.owner_id)
        if self.approval_status is not None:
            query = query.filter(model.approval_status == self.approval_status)
        if self.is_active is not None:
            query = query.filter(model.is_active == self.is_active)
        if self.featured is not None:
            query = query.filter(model.featured == self.featured)
        return query

    def cache_key(self) -> str:
        status = self.approval_status.value if self.approval_status else "-"
        return f"owner={self.owner_id}:status={status}:active={self.is_active}:featured={self.featured}"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _find(db: Session, kind: ResourceKind, resource_id: int):
    resource = db.query(kind.model).filter(kind.model.id == resource_id).first()
    if resource is None:
        raise NotFound(f"{kind.label} not found")
    return resource


def _compare_and_swap(
    db: Session,
    kind: ResourceKind,
    resource_id: int,
    values: Dict[str, Any],
    expected_status: Optional[ApprovalStatus] = None,
) -> bool:
    """UPDATE the row in one statement; False if the precondition no longer holds."""
    query = db.query(kind.model).filter(kind.model.id == resource_id)
    if expected_status is not None:
        query = query.filter(kind.model.approval_status == expected_status)
    updated = query.update({**values, "updated_at": _now()}, synchronize_session=False)
    return updated == 1


def _log(
    db: Session,
    action: ModerationAction,
    kind: ResourceKind,
    resource_id: int,
    actor: Optional[Actor],
    payload: Optional[Dict[str, Any]] = None,
) -> ModerationLog:
    entry = ModerationLog(
        action=action,
        resource_type=kind.type.value,
        resource_id=resource_id,
        actor_id=actor.id if actor is not None else None,
        payload=payload or {},
    )
    db.add(entry)
    return entry


def _title(resource) -> str:
    return getattr(resource, "title", None) or getattr(resource, "name", "")


def _require_pending(kind: ResourceKind, resource) -> None:
    if resource.approval_status != ApprovalStatus.PENDING:
        raise InvalidState(f"{kind.label} is already {ApprovalStatus(resource.approval_status).value}")


def list_moderable(
    db: Session,
    resource_type: ResourceType,
    actor: Optional[Actor],
    scope: Optional[ListScope] = None,
    order_by=None,
) -> List[Any]:
    """Records of resource_type the actor may read, narrowed by scope."""
    kind = kind_of(resource_type)
    authorize(actor, Operation.READ_LIST, kind.type)

    query = db.query(kind.model).filter(visibility_clause(actor, kind.type))
    if scope is not None:
        query = scope.apply(query, kind)
    if order_by is None:
        order_by = kind.model.created_at.desc()
    return query.order_by(order_by).all()


def get_moderable(db: Session, resource_type: ResourceType, resource_id: int, actor: Optional[Actor]):
    kind = kind_of(resource_type)
    resource = _find(db, kind, resource_id)
    authorize(actor, Operation.READ_ONE, kind.type, resource)
    return resource


def approve(
    db: Session,
    resource_type: ResourceType,
    resource_id: int,
    actor: Optional[Actor],
    featured: Optional[bool] = None,
    is_active: Optional[bool] = None,
):
    """pending → approved. Optionally sets featured / is_active in the same write."""
    kind = kind_of(resource_type)
    authorize(actor, Operation.MODERATE, kind.type)

    resource = _find(db, kind, resource_id)
    _require_pending(kind, resource)

    values: Dict[str, Any] = {"approval_status": ApprovalStatus.APPROVED, "rejection_reason": None}
    if featured is not None:
        values["featured"] = featured
    if is_active is not None:
        values["is_active"] = is_active

    if not _compare_and_swap(db, kind, resource.id, values, expected_status=ApprovalStatus.PENDING):
        db.rollback()
        raise InvalidState(f"{kind.label} is no longer pending")

    _log(db, ModerationAction.APPROVED, kind, resource.id, actor,
         {k: v for k, v in (("featured", featured), ("is_active", is_active)) if v is not None})
    db.commit()
    db.refresh(resource)

    logger.info("%s %s approved by admin %s", kind.label, resource.id, actor.id)
    listing_cache.invalidate(kind.type.value)
    notify_moderation_outcome(kind.owner_id(resource), kind.label, _title(resource), approved=True)
    return resource


def reject(
    db: Session,
    resource_type: ResourceType,
    resource_id: int,
    actor: Optional[Actor],
    reason: Optional[str],
):
    """pending → rejected. A non-blank reason is mandatory."""
    kind = kind_of(resource_type)
    authorize(actor, Operation.MODERATE, kind.type)

    reason = (reason or "").strip()
    if not reason:
        raise ValidationFailed("Rejection reason is required")

    resource = _find(db, kind, resource_id)
    _require_pending(kind, resource)

    values = {"approval_status": ApprovalStatus.REJECTED, "rejection_reason": reason}
    if not _compare_and_swap(db, kind, resource.id, values, expected_status=ApprovalStatus.PENDING):
        db.rollback()
        raise InvalidState(f"{kind.label} is no longer pending")

    _log(db, ModerationAction.REJECTED, kind, resource.id, actor, {"reason": reason})
    db.commit()
    db.refresh(resource)

    logger.info("%s %s rejected by admin %s", kind.label, resource.id, actor.id)
    listing_cache.invalidate(kind.type.value)
    notify_moderation_outcome(kind.owner_id(resource), kind.label, _title(resource), approved=False, reason=reason)
    return resource


def set_active(
    db: Session,
    resource_type: ResourceType,
    resource_id: int,
    actor: Optional[Actor],
    is_active: bool,
):
    """Hide or show a resource without touching its approval state.

    Admins do this as moderation; owners as an ordinary update.
    """
    kind = kind_of(resource_type)
    if isinstance(actor, AdminActor):
        operation = Operation.MODERATE
        authorize(actor, operation, kind.type)
        resource = _find(db, kind, resource_id)
    else:
        operation = Operation.UPDATE
        resource = _find(db, kind, resource_id)
        authorize(actor, operation, kind.type, resource)

    if resource.is_active == is_active:
        return resource

    if not _compare_and_swap(db, kind, resource.id, {"is_active": is_active}):
        db.rollback()
        raise NotFound(f"{kind.label} not found")
    action = ModerationAction.ACTIVATED if is_active else ModerationAction.DEACTIVATED
    _log(db, action, kind, resource.id, actor)
    db.commit()
    db.refresh(resource)

    logger.info("%s %s %s by %s %s", kind.label, resource.id, action.value, actor.role.value, actor.id)
    listing_cache.invalidate(kind.type.value)
    if operation == Operation.MODERATE:
        notify(kind.owner_id(resource), "info",
               f"Your {kind.label.lower()} '{_title(resource)}' was {action.value} by an administrator.")
    return resource


def set_featured(
    db: Session,
    resource_type: ResourceType,
    resource_id: int,
    actor: Optional[Actor],
    featured: bool,
):
    """Promote or demote a resource. Admin only, independent of approval state."""
    kind = kind_of(resource_type)
    authorize(actor, Operation.MODERATE, kind.type)
    resource = _find(db, kind, resource_id)

    if resource.featured == featured:
        return resource

    if not _compare_and_swap(db, kind, resource.id, {"featured": featured}):
        db.rollback()
        raise NotFound(f"{kind.label} not found")
    action = ModerationAction.FEATURED if featured else ModerationAction.UNFEATURED
    _log(db, action, kind, resource.id, actor)
    db.commit()
    db.refresh(resource)

    listing_cache.invalidate(kind.type.value)
    return resource


def _check_writable(changes: Dict[str, Any]) -> None:
    protected = sorted(PROTECTED_FIELDS.intersection(changes))
    if protected:
        raise ValidationFailed(f"Fields cannot be set directly: {', '.join(protected)}")


def create_resource(
    db: Session,
    resource_type: ResourceType,
    actor: Optional[Actor],
    data: Dict[str, Any],
):
    """Create a resource owned by the actor. It always starts pending review."""
    kind = kind_of(resource_type)
    _check_writable(data)

    resource = kind.model(
        **data,
        approval_status=ApprovalStatus.PENDING,
        rejection_reason=None,
        is_active=True,
        featured=False,
    )
    setattr(resource, kind.owner_attr, actor.id if actor is not None else None)
    authorize(actor, Operation.CREATE, kind.type, resource)

    db.add(resource)
    db.commit()
    db.refresh(resource)

    logger.info("%s %s created by %s %s, pending approval", kind.label, resource.id, actor.role.value, actor.id)
    listing_cache.invalidate(kind.type.value)
    return resource


def update_resource(
    db: Session,
    resource_type: ResourceType,
    resource_id: int,
    actor: Optional[Actor],
    changes: Dict[str, Any],
):
    kind = kind_of(resource_type)
    resource = _find(db, kind, resource_id)
    authorize(actor, Operation.UPDATE, kind.type, resource)
    _check_writable(changes)

    for field_name, value in changes.items():
        setattr(resource, field_name, value)
    resource.updated_at = _now()

    if settings.requeue_on_edit and resource.approval_status != ApprovalStatus.PENDING:
        previous = ApprovalStatus(resource.approval_status).value
        resource.approval_status = ApprovalStatus.PENDING
        resource.rejection_reason = None
        _log(db, ModerationAction.REQUEUED, kind, resource.id, actor, {"previous_status": previous})

    db.commit()
    db.refresh(resource)

    listing_cache.invalidate(kind.type.value)
    return resource


def delete_resource(
    db: Session,
    resource_type: ResourceType,
    resource_id: int,
    actor: Optional[Actor],
) -> None:
    """Hard delete, owner only."""
    kind = kind_of(resource_type)
    resource = _find(db, kind, resource_id)
    authorize(actor, Operation.DELETE, kind.type, resource)

    db.delete(resource)
    db.commit()

    logger.info("%s %s deleted by %s %s", kind.label, resource_id, actor.role.value, actor.id)
    listing_cache.invalidate(kind.type.value)
