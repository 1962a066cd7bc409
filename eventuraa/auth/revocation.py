"""Deny-list of logged-out access tokens, keyed by token id."""
import logging
from datetime import datetime, timezone

import redis

from eventuraa.redis_client import get_redis_client
from eventuraa.services.errors import Unavailable

logger = logging.getLogger(__name__)


def _key(token_id: str) -> str:
    return f"session:revoked:{token_id}"


def revoke(token_id: str, expires_at: datetime) -> None:
    """Revoke a token until it would have expired anyway."""
    ttl = int((expires_at - datetime.now(timezone.utc)).total_seconds())
    if ttl <= 0:
        return
    try:
        get_redis_client().set(_key(token_id), "1", ex=ttl)
    except redis.RedisError as e:
        logger.error("Failed to revoke session %s: %s", token_id, e)
        raise Unavailable("Session store is unavailable, please try again") from e


def is_revoked(token_id: str) -> bool:
    try:
        return get_redis_client().exists(_key(token_id)) > 0
    except redis.RedisError as e:
        logger.error("Session revocation check failed: %s", e)
        raise Unavailable("Session store is unavailable, please try again") from e
