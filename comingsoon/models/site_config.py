from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from comingsoon.core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SiteConfig(Base):
    __tablename__ = "site_config"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)
