"""
Admin viewer for the moderation log.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from eventuraa.database import get_db
from eventuraa.models.moderation_log import ModerationLog, ModerationAction
from eventuraa.models.user import Permission
from eventuraa.schemas.moderation import ModerationLogListResponse
from eventuraa.auth.dependencies import require_permission
from eventuraa.auth.session import AuthSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/moderation-log", tags=["Admin Moderation"])

reports_only = require_permission(Permission.VIEW_REPORTS)


@router.get("", response_model=ModerationLogListResponse)
def list_moderation_log(
    action: Optional[str] = Query(None, description="approved, rejected, activated, ..."),
    resource_type: Optional[str] = Query(None, description="events or venues"),
    resource_id: Optional[int] = Query(None),
    actor_id: Optional[int] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    _: AuthSession = Depends(reports_only),
):
    """List moderation actions with optional filters, most recent first."""
    query = db.query(ModerationLog)

    if action:
        try:
            action_enum = ModerationAction(action)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid action: {action}")
        query = query.filter(ModerationLog.action == action_enum)

    if resource_type:
        query = query.filter(ModerationLog.resource_type == resource_type)

    if resource_id:
        query = query.filter(ModerationLog.resource_id == resource_id)

    if actor_id:
        query = query.filter(ModerationLog.actor_id == actor_id)

    total = query.count()
    items = query.order_by(ModerationLog.created_at.desc()).offset(offset).limit(limit).all()

    return ModerationLogListResponse(items=items, total=total)
