from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Used by admin moderation routes (bypasses RLS)

    # Storage buckets
    avatar_bucket: str = "vendor-profiles"
    vendor_image_bucket: str = "vendor-images"
    max_avatar_images: int = 1
    max_vendor_images: int = 4
    max_upload_bytes: int = 5 * 1024 * 1024

    # Polls
    poll_request_max_options: int = 6
    poll_events_keepalive_seconds: float = 15.0

    # Auth
    auth_cache_ttl_seconds: int = 60

    # App
    app_name: str = "rateam-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def get_bucket_limits(self) -> dict:
        """Bucket name -> max images a single owner may keep in it."""
        return {
            self.avatar_bucket: self.max_avatar_images,
            self.vendor_image_bucket: self.max_vendor_images,
        }

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
