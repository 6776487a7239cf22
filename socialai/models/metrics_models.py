"""SocialAI Insights — Persisted Metric Models.

One row per platform in ``platform_metrics``; append-only engagement
samples; per-platform age-group demographics.
"""

from datetime import datetime, timezone
from typing import Optional
from sqlmodel import SQLModel, Field

PLATFORMS = ("instagram", "youtube", "google")


class PlatformMetric(SQLModel, table=True):
    """Latest metrics for a single platform.

    ``platform`` is unique, so updates are upserts keyed on it.
    """

    __tablename__ = "platform_metrics"

    id: Optional[int] = Field(default=None, primary_key=True)
    platform: str = Field(
        index=True, unique=True, description="instagram | youtube | google"
    )
    followers: Optional[int] = Field(default=None, description="Followers or subscribers")
    total_posts: Optional[int] = Field(default=None, description="Posts or videos")
    avg_views: Optional[int] = Field(default=None, description="Views per video")
    search_impressions: Optional[float] = Field(default=None)
    click_rate: Optional[float] = Field(default=None, description="CTR in percent")
    avg_position: Optional[float] = Field(default=None)
    engagement_rate: Optional[float] = Field(default=None, description="Percent")
    growth_rate: Optional[float] = Field(default=None, description="Percent")
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class EngagementSample(SQLModel, table=True):
    """A single timestamped engagement observation."""

    __tablename__ = "engagement_data"

    id: Optional[int] = Field(default=None, primary_key=True)
    timestamp: datetime = Field(index=True)
    platform: str = Field(index=True)
    engagement_count: int = Field(default=0)


class DemographicSegment(SQLModel, table=True):
    """Share of a platform's audience in one age bracket."""

    __tablename__ = "audience_demographics"

    id: Optional[int] = Field(default=None, primary_key=True)
    platform: str = Field(index=True)
    age_group: str = Field(description="e.g. 18-24")
    percentage: float = Field(default=0.0)
