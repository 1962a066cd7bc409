"""
Redis cache for public listings.

Each resource type has a version counter that is part of every cache key.
Any mutation targeting a resource type bumps its version, which orphans all
cached pages of that type at once; orphaned keys expire through their TTL.
The cache is best effort: Redis errors are logged and the caller falls
back to the database.
"""
import json
import logging
from typing import Any, List, Optional

import redis

from eventuraa.config import settings
from eventuraa.redis_client import get_redis_client

logger = logging.getLogger(__name__)


class ListingCache:
    def __init__(self, prefix: str = "listing"):
        self.prefix = prefix

    @property
    def redis(self):
        return get_redis_client()

    def _version_key(self, resource_type: str) -> str:
        return f"{self.prefix}:version:{resource_type}"

    def _key(self, resource_type: str, scope_key: str, version: str) -> str:
        return f"{self.prefix}:{resource_type}:v{version}:{scope_key}"

    def version(self, resource_type: str) -> Optional[str]:
        """Current version of resource_type, None when the cache is off or unreachable.

        Read it once before the database query and pass it to both get() and
        set(): a listing built before an invalidation is then written under
        the old, orphaned version and never served.
        """
        if not settings.listing_cache_enabled:
            return None
        try:
            version = self.redis.get(self._version_key(resource_type))
        except redis.RedisError as e:
            logger.warning("Listing cache version read failed for %s: %s", resource_type, e)
            return None
        return str(version) if version else "0"

    def get(self, resource_type: str, scope_key: str, version: Optional[str]) -> Optional[List[Any]]:
        if version is None:
            return None
        try:
            raw = self.redis.get(self._key(resource_type, scope_key, version))
        except redis.RedisError as e:
            logger.warning("Listing cache read failed for %s: %s", resource_type, e)
            return None
        return json.loads(raw) if raw else None

    def set(self, resource_type: str, scope_key: str, items: List[Any], version: Optional[str]) -> None:
        if version is None:
            return
        try:
            self.redis.set(
                self._key(resource_type, scope_key, version),
                json.dumps(items),
                ex=settings.listing_cache_ttl_seconds,
            )
        except redis.RedisError as e:
            logger.warning("Listing cache write failed for %s: %s", resource_type, e)

    def invalidate(self, resource_type: str) -> None:
        """Drop every cached listing of resource_type."""
        try:
            self.redis.incr(self._version_key(resource_type))
        except redis.RedisError as e:
            logger.warning("Listing cache invalidation failed for %s: %s", resource_type, e)


listing_cache = ListingCache()
