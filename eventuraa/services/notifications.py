"""
Owner notifications - fire and forget.

Moderation decides when to notify; this module only enqueues. A failure to
enqueue is logged and never changes the result of the calling operation.
"""
import logging
from typing import Optional

from eventuraa.config import settings

logger = logging.getLogger(__name__)

LEVELS = ("info", "success", "error")


def notify(recipient_id: int, level: str, message: str) -> None:
    """Queue a one-line notification for an account."""
    if level not in LEVELS:
        level = "info"

    if not settings.notifications_enabled:
        logger.info("Notification for user %s skipped (disabled): [%s] %s", recipient_id, level, message)
        return

    try:
        from eventuraa.tasks import deliver_notification
        deliver_notification.delay(recipient_id, level, message)
    except Exception as e:
        logger.error("Failed to enqueue notification for user %s: %s", recipient_id, e)


def notify_moderation_outcome(
    owner_id: int,
    label: str,
    title: str,
    approved: bool,
    reason: Optional[str] = None,
) -> None:
    """Tell the owning organizer or venue host how review went."""
    if approved:
        notify(owner_id, "success", f"Your {label.lower()} '{title}' has been approved and is now listed.")
    else:
        notify(owner_id, "error", f"Your {label.lower()} '{title}' was rejected: {reason}")
