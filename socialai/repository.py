"""SocialAI Insights — Metrics Repository.

Reads for the dashboard and the per-platform upsert used by the fetchers.
"""

from typing import Any, Dict, List

from sqlmodel import Session, select

from socialai.models.metrics_models import (
    DemographicSegment,
    EngagementSample,
    PlatformMetric,
)
from socialai.core.logging import get_logger

logger = get_logger("repository")


class MetricsRepository:
    """Persistence access for the three dashboard tables."""

    def __init__(self, session: Session):
        self.session = session

    def upsert_platform_metric(self, payload: Dict[str, Any]) -> PlatformMetric:
        """Insert or update the row keyed by ``payload["platform"]``.

        Every field in the payload replaces the stored value; fields the
        payload omits keep theirs.
        """
        platform = payload["platform"]
        try:
            existing = self.session.exec(
                select(PlatformMetric).where(PlatformMetric.platform == platform)
            ).first()

            if existing:
                for key, value in payload.items():
                    setattr(existing, key, value)
                record = existing
            else:
                record = PlatformMetric(**payload)

            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
        except Exception:
            self.session.rollback()
            raise

        logger.info(
            f"Upserted {platform} metrics ({'updated' if existing else 'created'})",
            extra={"platform": platform},
        )
        return record

    def list_platform_metrics(self) -> List[PlatformMetric]:
        return list(self.session.exec(select(PlatformMetric)).all())

    def list_engagement(self) -> List[EngagementSample]:
        """All engagement samples, oldest first."""
        query = select(EngagementSample).order_by(EngagementSample.timestamp.asc())  # type: ignore
        return list(self.session.exec(query).all())

    def list_demographics(self, platform: str) -> List[DemographicSegment]:
        query = select(DemographicSegment).where(DemographicSegment.platform == platform)
        return list(self.session.exec(query).all())
