"""Redis key namespaces and TTL constants."""

# TTL values in seconds
PROFILE_LOCK_TTL = 60  # must outlive one generation call
THROTTLE_WINDOW = 60


class CacheKeys:
    """Redis key builders for all namespaces."""

    @staticmethod
    def throttle(user_id: int, action: str) -> str:
        return f"throttle:{user_id}:{action}"

    @staticmethod
    def profile_lock(user_id: int) -> str:
        return f"profile_lock:{user_id}"
