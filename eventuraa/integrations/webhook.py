"""
Notification webhook client.

Posts one-line owner notifications to an external delivery service (email or
push gateway). Returns True on success, False on error.
"""
import logging
import httpx

from eventuraa.config import settings

logger = logging.getLogger(__name__)


def send_notification(email: str, level: str, message: str) -> bool:
    if not settings.notification_webhook_url:
        logger.info("Notification webhook not configured. [%s] %s -> %s", level, message, email)
        return True

    headers = {"Content-Type": "application/json"}
    if settings.notification_webhook_token:
        headers["Authorization"] = f"Bearer {settings.notification_webhook_token}"
    payload = {
        "to": email,
        "level": level,
        "message": message,
    }

    try:
        with httpx.Client(timeout=10) as client:
            resp = client.post(settings.notification_webhook_url, headers=headers, json=payload)
        if resp.status_code in (200, 201, 202):
            return True
        logger.error("send_notification failed: %s %s", resp.status_code, resp.text)
        return False
    except Exception as e:
        logger.error("send_notification exception: %s", e)
        return False
