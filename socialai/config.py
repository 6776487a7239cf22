"""SocialAI Insights — Central Configuration via Pydantic Settings."""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # ── Platform credentials (all optional; missing ones skip that platform) ──
    instagram_access_token: Optional[str] = None
    youtube_api_key: Optional[str] = None
    youtube_channel_id: Optional[str] = None
    google_access_token: Optional[str] = None
    search_console_site_url: str = ""

    # ── Platform endpoints ──
    instagram_base_url: str = "https://graph.instagram.com"
    youtube_base_url: str = "https://www.googleapis.com/youtube/v3"
    search_console_base_url: str = "https://www.googleapis.com/webmasters/v3"
    http_timeout: float = 30.0

    # ── Database ──
    database_url: str = ""

    # ── App ──
    log_level: str = "INFO"
    default_platform: str = "instagram"

    @property
    def effective_database_url(self) -> str:
        """Return PostgreSQL URL if set, otherwise fall back to SQLite."""
        return self.database_url or "sqlite:///./socialai.db"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
