"""SocialAI Insights — Refresh Input / Output Models."""

from typing import List, Optional
from pydantic import BaseModel

from socialai.config import Settings, settings


class CredentialConfig(BaseModel):
    """Optional per-platform credentials for one refresh.

    Held in memory for the duration of the call; never persisted.
    """

    instagram_token: Optional[str] = None
    youtube_key: Optional[str] = None
    youtube_channel_id: Optional[str] = None
    google_token: Optional[str] = None

    @classmethod
    def from_settings(cls, source: Settings = settings) -> "CredentialConfig":
        return cls(
            instagram_token=source.instagram_access_token,
            youtube_key=source.youtube_api_key,
            youtube_channel_id=source.youtube_channel_id,
            google_token=source.google_access_token,
        )


class PlatformUpdateResult(BaseModel):
    """Outcome of one platform's fetch-and-upsert."""

    platform: str
    success: bool
    error: Optional[str] = None


class UpdateReport(BaseModel):
    """Per-platform outcomes of a refresh, in selection order."""

    results: List[PlatformUpdateResult] = []

    @property
    def success(self) -> bool:
        """True only if every selected platform updated."""
        return all(r.success for r in self.results)

    @property
    def failed_platforms(self) -> List[str]:
        return [r.platform for r in self.results if not r.success]
