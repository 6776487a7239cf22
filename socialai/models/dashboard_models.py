"""SocialAI Insights — Dashboard Display Models.

Display-ready shapes returned to the browser, plus the immutable
``DashboardState`` snapshot and its transitions.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, computed_field


# ─────────────────────────────────────────────
# METRIC CARDS
# ─────────────────────────────────────────────


class InstagramCard(BaseModel):
    model_config = ConfigDict(frozen=True)

    followers: str = "0"
    engagement: str = "0%"
    recent_posts: int = 0
    growth: str = "0%"


class YouTubeCard(BaseModel):
    model_config = ConfigDict(frozen=True)

    subscribers: str = "0"
    avg_views: str = "0"
    total_videos: int = 0
    growth: str = "0%"


class GoogleCard(BaseModel):
    model_config = ConfigDict(frozen=True)

    search_impressions: str = "0"
    click_rate: str = "0%"
    avg_position: str = "0"
    growth: str = "0%"


class SocialMetrics(BaseModel):
    """The three platform cards shown at the top of the dashboard."""

    model_config = ConfigDict(frozen=True)

    instagram: InstagramCard = InstagramCard()
    youtube: YouTubeCard = YouTubeCard()
    google: GoogleCard = GoogleCard()


# ─────────────────────────────────────────────
# CHART SERIES
# ─────────────────────────────────────────────


class EngagementPoint(BaseModel):
    """One point of the engagement area chart."""

    model_config = ConfigDict(frozen=True)

    timestamp: str
    engagement: int
    platform: str


class DemographicSlice(BaseModel):
    """One slice of the audience pie chart."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: float
    color: str = ""


# ─────────────────────────────────────────────
# STATE SNAPSHOT
# ─────────────────────────────────────────────


class DashboardStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    UPDATING = "updating"


class DashboardState(BaseModel):
    """Immutable dashboard snapshot.

    ``loading`` tracks a full reload and ``updating`` tracks a manual
    refresh; the two flags are independent. Every transition returns a
    new snapshot and leaves the receiver untouched.
    """

    model_config = ConfigDict(frozen=True)

    loading: bool = False
    updating: bool = False
    selected_platform: str = "instagram"
    metrics: SocialMetrics = SocialMetrics()
    engagement: Tuple[EngagementPoint, ...] = ()
    demographics: Tuple[DemographicSlice, ...] = ()
    last_loaded_at: Optional[datetime] = None

    @computed_field  # type: ignore[misc]
    @property
    def status(self) -> DashboardStatus:
        if self.updating:
            return DashboardStatus.UPDATING
        if self.loading:
            return DashboardStatus.LOADING
        return DashboardStatus.IDLE

    def begin_load(self) -> "DashboardState":
        return self.model_copy(update={"loading": True})

    def finish_load(
        self,
        metrics: SocialMetrics,
        engagement: List[EngagementPoint],
        demographics: List[DemographicSlice],
    ) -> "DashboardState":
        return self.model_copy(
            update={
                "loading": False,
                "metrics": metrics,
                "engagement": tuple(engagement),
                "demographics": tuple(demographics),
                "last_loaded_at": datetime.now(timezone.utc),
            }
        )

    def fail_load(self) -> "DashboardState":
        """Clear the loading flag, keeping whatever was rendered before."""
        return self.model_copy(update={"loading": False})

    def begin_update(self) -> "DashboardState":
        return self.model_copy(update={"updating": True})

    def finish_update(self) -> "DashboardState":
        return self.model_copy(update={"updating": False})

    def select_platform(self, platform: str) -> "DashboardState":
        return self.model_copy(update={"selected_platform": platform})
