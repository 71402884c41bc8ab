from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String

from comingsoon.core.database import Base

STATUS_ACTIVE = "active"
STATUS_UNSUBSCRIBED = "unsubscribed"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Subscriber(Base):
    __tablename__ = "subscriptions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    subscribed_at = Column(DateTime, default=_utcnow, nullable=False)
    status = Column(String(16), default=STATUS_ACTIVE, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "subscribed_at": self.subscribed_at.isoformat() if self.subscribed_at else None,
            "status": self.status,
        }
