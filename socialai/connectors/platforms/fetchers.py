"""SocialAI Insights — Platform Fetchers.

One fetcher per platform. Each calls a single endpoint, normalizes the
response into a ``platform_metrics`` payload and upserts it.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Optional
from urllib.parse import quote

from socialai.config import settings
from socialai.connectors.platforms.client import PlatformAPIError, PlatformClient
from socialai.models.metrics_models import PlatformMetric
from socialai.repository import MetricsRepository
from socialai.core.logging import get_logger

logger = get_logger("platforms.fetchers")

INSTAGRAM_FIELDS = "followers_count,media_count"
SEARCH_WINDOW_DAYS = 30


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _safe_int(value: Any) -> int:
    """Coerce a count (often a numeric string) to int, 0 if unusable."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else _safe_int(value)


def average_views(view_count: Any, video_count: Any) -> int:
    """Floor of views per video; 0 for a channel without videos."""
    videos = _safe_int(video_count)
    if videos <= 0:
        return 0
    return _safe_int(view_count) // videos


def search_window(today: Optional[date] = None) -> tuple[str, str]:
    """Trailing 30-day window as (start, end) ISO dates, both inclusive."""
    today = today or _now().date()
    start = today - timedelta(days=SEARCH_WINDOW_DAYS)
    return start.isoformat(), today.isoformat()


# ── Instagram ──


async def fetch_instagram_metrics(
    client: PlatformClient,
    repository: MetricsRepository,
    access_token: str,
    base_url: str | None = None,
) -> PlatformMetric:
    """Fetch follower and media counts from the Instagram profile endpoint."""
    url = f"{base_url or settings.instagram_base_url}/me"
    params = {"fields": INSTAGRAM_FIELDS, "access_token": access_token}
    data = await client.request_json("instagram", "GET", url, params=params)

    payload: Dict[str, Any] = {
        "platform": "instagram",
        "followers": _optional_int(data.get("followers_count")),
        "total_posts": _optional_int(data.get("media_count")),
        "updated_at": _now(),
    }
    return repository.upsert_platform_metric(payload)


# ── YouTube ──


async def fetch_youtube_metrics(
    client: PlatformClient,
    repository: MetricsRepository,
    api_key: str,
    channel_id: str,
    base_url: str | None = None,
) -> PlatformMetric:
    """Fetch channel statistics from the YouTube Data API."""
    url = f"{base_url or settings.youtube_base_url}/channels"
    params = {"part": "statistics", "id": channel_id, "key": api_key}
    data = await client.request_json("youtube", "GET", url, params=params)

    items = data.get("items") or []
    if not items:
        raise PlatformAPIError(
            f"YouTube channel {channel_id} not found", platform="youtube"
        )
    stats = items[0].get("statistics", {})

    payload: Dict[str, Any] = {
        "platform": "youtube",
        "followers": _optional_int(stats.get("subscriberCount")),
        "total_posts": _optional_int(stats.get("videoCount")),
        "avg_views": average_views(stats.get("viewCount"), stats.get("videoCount")),
        "updated_at": _now(),
    }
    return repository.upsert_platform_metric(payload)


# ── Google Search Console ──


async def fetch_search_console_metrics(
    client: PlatformClient,
    repository: MetricsRepository,
    access_token: str,
    site_url: str | None = None,
    base_url: str | None = None,
    today: Optional[date] = None,
) -> PlatformMetric:
    """Fetch 30-day search analytics totals for the configured site."""
    site = quote(site_url or settings.search_console_site_url, safe="")
    url = f"{base_url or settings.search_console_base_url}/sites/{site}/searchAnalytics/query"
    start_date, end_date = search_window(today)

    data = await client.request_json(
        "google",
        "POST",
        url,
        json={"startDate": start_date, "endDate": end_date},
        headers={"Authorization": f"Bearer {access_token}"},
    )
    totals = data.get("totals") or {}

    payload: Dict[str, Any] = {
        "platform": "google",
        "search_impressions": totals.get("impressions") or 0,
        "click_rate": (totals.get("ctr") or 0) * 100,
        "avg_position": totals.get("position") or 0,
        "updated_at": _now(),
    }
    return repository.upsert_platform_metric(payload)
