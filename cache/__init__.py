from cache.client import RedisClient
from cache.keys import PROFILE_LOCK_TTL, THROTTLE_WINDOW, CacheKeys
from cache.locks import profile_lock

__all__ = [
    "PROFILE_LOCK_TTL",
    "THROTTLE_WINDOW",
    "CacheKeys",
    "RedisClient",
    "profile_lock",
]
