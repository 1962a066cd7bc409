"""
Celery tasks for fire-and-forget side effects

Tasks:
- deliver_notification: send a one-line notification to an account owner
"""
import logging

from eventuraa.celery_app import celery_app
from eventuraa.database import SessionLocal
from eventuraa.models.user import User
from eventuraa.integrations.webhook import send_notification

logger = logging.getLogger(__name__)


@celery_app.task(name="eventuraa.tasks.deliver_notification")
def deliver_notification(recipient_id: int, level: str, message: str) -> bool:
    """Look up the recipient and hand the message to the webhook. No retries."""
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.id == recipient_id).first()
        if user is None:
            logger.warning("Notification recipient %s not found, dropping: %s", recipient_id, message)
            return False
        return send_notification(user.email, level, message)
    finally:
        db.close()
