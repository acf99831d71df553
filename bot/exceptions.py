"""Application exception hierarchy."""

# Default user-facing messages
_DEFAULT_USER_MSG = "Something went wrong. Please try again later."
_AI_GENERATION_MSG = "Content generation failed. Please try again."
_UNKNOWN_PLAN_MSG = "Your subscription could not be read. Please contact support."
_PROFILE_BUSY_MSG = "Still working on your previous message. Please wait a moment."


class AppError(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str = "Internal error",
        user_message: str = _DEFAULT_USER_MSG,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.user_message = user_message


class AIGenerationError(AppError):
    """Raised by the generation client when the provider call fails."""

    def __init__(
        self,
        message: str = "AI generation failed",
        user_message: str = _AI_GENERATION_MSG,
    ) -> None:
        super().__init__(message=message, user_message=user_message)


class UnknownPlanError(AppError):
    """Raised when a plan id outside the catalog is looked up.

    Never expected in correct operation: the only writer of ``plan`` is the
    payment activation step, which always writes a catalog id.
    """

    def __init__(
        self,
        plan_id: str = "",
        user_message: str = _UNKNOWN_PLAN_MSG,
    ) -> None:
        super().__init__(message=f"Unknown plan: {plan_id!r}", user_message=user_message)
        self.plan_id = plan_id


class ProfileBusyError(AppError):
    """Raised when the per-user profile lock cannot be acquired in time."""

    def __init__(
        self,
        message: str = "Profile lock is held by another update",
        user_message: str = _PROFILE_BUSY_MSG,
    ) -> None:
        super().__init__(message=message, user_message=user_message)
