"""SocialAI Insights — Dashboard Formatting.

Turns stored rows into the strings and series the dashboard renders.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, List, Optional

from socialai.models.dashboard_models import (
    DemographicSlice,
    EngagementPoint,
    GoogleCard,
    InstagramCard,
    SocialMetrics,
    YouTubeCard,
)
from socialai.models.metrics_models import (
    DemographicSegment,
    EngagementSample,
    PlatformMetric,
)

PIE_COLORS = ("#8b5cf6", "#ec4899", "#3b82f6", "#10b981")


def _plain(num: Any) -> str:
    """Render a number the way a browser would: no trailing ``.0``."""
    if isinstance(num, float) and num.is_integer():
        return str(int(num))
    return str(num)


def _fixed1(num: float) -> str:
    """One decimal place, exact ties rounded up (1.25 -> "1.3")."""
    return str(Decimal(num).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def format_number(num: float) -> str:
    """Compress a count: 1500 -> "1.5K", 2300000 -> "2.3M", 42 -> "42"."""
    if num >= 1_000_000:
        return f"{_fixed1(num / 1_000_000)}M"
    if num >= 1_000:
        return f"{_fixed1(num / 1_000)}K"
    return _plain(num)


def format_percent(value: Optional[float]) -> str:
    return f"{_plain(value or 0)}%"


def format_growth(value: Optional[float]) -> str:
    return f"+{_plain(value or 0)}%"


def format_position(value: Optional[float]) -> str:
    if value is None:
        return "0"
    return _fixed1(value)


def format_date_label(ts: datetime) -> str:
    """Short date label, e.g. 3/7/2024."""
    return f"{ts.month}/{ts.day}/{ts.year}"


def _find(rows: Iterable[PlatformMetric], platform: str) -> PlatformMetric:
    """Row for ``platform``, or an all-empty row if none is stored."""
    for row in rows:
        if row.platform == platform:
            return row
    return PlatformMetric(platform=platform)


def build_metric_cards(rows: List[PlatformMetric]) -> SocialMetrics:
    """Build the three platform cards; missing rows render as zeros."""
    ig = _find(rows, "instagram")
    yt = _find(rows, "youtube")
    gsc = _find(rows, "google")

    return SocialMetrics(
        instagram=InstagramCard(
            followers=format_number(ig.followers or 0),
            engagement=format_percent(ig.engagement_rate),
            recent_posts=ig.total_posts or 0,
            growth=format_growth(ig.growth_rate),
        ),
        youtube=YouTubeCard(
            subscribers=format_number(yt.followers or 0),
            avg_views=format_number(yt.avg_views or 0),
            total_videos=yt.total_posts or 0,
            growth=format_growth(yt.growth_rate),
        ),
        google=GoogleCard(
            search_impressions=format_number(gsc.search_impressions or 0),
            click_rate=format_percent(gsc.click_rate),
            avg_position=format_position(gsc.avg_position),
            growth=format_growth(gsc.growth_rate),
        ),
    )


def build_engagement_series(samples: List[EngagementSample]) -> List[EngagementPoint]:
    # Order comes from the query; never re-sorted here
    return [
        EngagementPoint(
            timestamp=format_date_label(s.timestamp),
            engagement=s.engagement_count,
            platform=s.platform,
        )
        for s in samples
    ]


def build_demographics(segments: List[DemographicSegment]) -> List[DemographicSlice]:
    return [
        DemographicSlice(
            name=seg.age_group,
            value=float(seg.percentage),
            color=PIE_COLORS[i % len(PIE_COLORS)],
        )
        for i, seg in enumerate(segments)
    ]
