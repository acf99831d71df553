"""Application configuration via Pydantic Settings v2."""

from functools import lru_cache

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """All env vars the bot reads at startup."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Required ===
    telegram_bot_token: SecretStr
    telegram_webhook_secret: SecretStr
    supabase_url: str
    supabase_key: SecretStr
    upstash_redis_url: str
    upstash_redis_token: SecretStr
    openrouter_api_key: SecretStr

    # === Optional ===
    sentry_dsn: str = ""
    railway_public_url: str = ""
    health_check_token: SecretStr = SecretStr("")

    # === Defaults ===
    generation_model: str = "google/gemini-2.5-flash"
    generation_timeout: float = 30.0
    profile_lock_ttl: int = 60
    railway_graceful_shutdown_timeout: int = 30

    @field_validator("supabase_url")
    @classmethod
    def _supabase_url_must_be_https(cls, v: str) -> str:
        if not v.startswith("https://"):
            msg = "SUPABASE_URL must start with https://"
            raise ValueError(msg)
        return v

    @field_validator("generation_timeout")
    @classmethod
    def _timeout_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            msg = "GENERATION_TIMEOUT must be positive"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def _lock_must_outlive_generation(self) -> "Settings":
        # The profile lock is held across one generation call
        if self.profile_lock_ttl <= self.generation_timeout:
            msg = "PROFILE_LOCK_TTL must be greater than GENERATION_TIMEOUT"
            raise ValueError(msg)
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton Settings instance (cached after first call)."""
    return Settings()  # type: ignore[call-arg]
