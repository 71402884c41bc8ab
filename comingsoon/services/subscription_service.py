"""Subscriber lifecycle: NonExistent -> active <-> unsubscribed, until an admin deletes the row."""

import csv
import enum
import logging
from dataclasses import dataclass
from datetime import datetime, time, timezone
from io import StringIO
from typing import Iterable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from comingsoon.core.errors import InvalidEmail, NotFound, ValidationError
from comingsoon.models.subscriber import STATUS_ACTIVE, STATUS_UNSUBSCRIBED, Subscriber

logger = logging.getLogger(__name__)

MAX_EMAIL_LENGTH = 255
# Largest id a 64-bit INTEGER column can hold
MAX_ID = 2**63 - 1


class SubscribeOutcome(enum.Enum):
    CREATED = "created"
    ALREADY_ACTIVE = "already_active"
    REACTIVATED = "reactivated"


@dataclass(frozen=True)
class SubscribeResult:
    outcome: SubscribeOutcome
    subscriber: Subscriber


def validate_email(raw: Optional[str]) -> str:
    email = (raw or "").strip()
    if not email or len(email) > MAX_EMAIL_LENGTH or "@" not in email:
        raise InvalidEmail()
    local, _, domain = email.rpartition("@")
    if not local or not domain or "." not in domain:
        raise InvalidEmail()
    return email


def _find_by_email(db: Session, email: str) -> Optional[Subscriber]:
    return db.query(Subscriber).filter_by(email=email).first()


def _resolve_existing(db: Session, row: Subscriber) -> SubscribeResult:
    if row.status == STATUS_ACTIVE:
        return SubscribeResult(SubscribeOutcome.ALREADY_ACTIVE, row)

    row.status = STATUS_ACTIVE
    db.commit()
    db.refresh(row)
    logger.info("Subscription reactivated: id=%s", row.id)
    return SubscribeResult(SubscribeOutcome.REACTIVATED, row)


def subscribe(db: Session, email: str) -> SubscribeResult:
    email = validate_email(email)

    existing = _find_by_email(db, email)
    if existing:
        return _resolve_existing(db, existing)

    subscriber = Subscriber(email=email, status=STATUS_ACTIVE)
    db.add(subscriber)
    try:
        db.commit()
    except IntegrityError:
        # Another request inserted the same email between our lookup and insert.
        db.rollback()
        existing = _find_by_email(db, email)
        if existing is None:
            raise
        logger.info("Concurrent signup for existing email resolved as lookup: id=%s", existing.id)
        return _resolve_existing(db, existing)

    db.refresh(subscriber)
    logger.info("New subscription: id=%s", subscriber.id)
    return SubscribeResult(SubscribeOutcome.CREATED, subscriber)


def check_exists(db: Session, email: str) -> Optional[Subscriber]:
    return _find_by_email(db, validate_email(email))


def unsubscribe(db: Session, email: Optional[str]) -> None:
    email = (email or "").strip()
    if not email:
        raise ValidationError("Email address is required")

    changed = (
        db.query(Subscriber)
        .filter_by(email=email)
        .update({Subscriber.status: STATUS_UNSUBSCRIBED}, synchronize_session=False)
    )
    if changed == 0:
        db.rollback()
        raise NotFound("Email not found in the subscription list")
    db.commit()
    logger.info("Unsubscribed %d row(s)", changed)


def list_subscribers(db: Session) -> list[Subscriber]:
    return (
        db.query(Subscriber)
        .order_by(Subscriber.subscribed_at.desc(), Subscriber.id.desc())
        .all()
    )


def _in_id_range(subscriber_id: int) -> bool:
    return 1 <= subscriber_id <= MAX_ID


def delete_subscriber(db: Session, subscriber_id: int) -> None:
    if not _in_id_range(subscriber_id):
        raise NotFound("Subscriber not found")
    deleted = db.query(Subscriber).filter_by(id=subscriber_id).delete(synchronize_session=False)
    if deleted == 0:
        db.rollback()
        raise NotFound("Subscriber not found")
    db.commit()
    logger.info("Subscriber %s deleted", subscriber_id)


def bulk_delete(db: Session, ids: Iterable[int]) -> int:
    unique_ids = sorted({i for i in ids if _in_id_range(i)})
    if not unique_ids:
        return 0
    deleted = (
        db.query(Subscriber)
        .filter(Subscriber.id.in_(unique_ids))
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info("Bulk delete removed %d of %d requested subscribers", deleted, len(unique_ids))
    return deleted


def stats(db: Session) -> dict:
    total = db.query(Subscriber).count()
    active = db.query(Subscriber).filter_by(status=STATUS_ACTIVE).count()
    start_of_day = datetime.combine(datetime.now(timezone.utc).date(), time.min)
    today = db.query(Subscriber).filter(Subscriber.subscribed_at >= start_of_day).count()
    return {
        "total": total,
        "active": active,
        "unsubscribed": total - active,
        "today": today,
    }


def export_csv(db: Session) -> StringIO:
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(["ID", "Email", "Status", "Subscribed At"])

    for r in list_subscribers(db):
        writer.writerow([r.id, r.email, r.status, r.subscribed_at.isoformat() if r.subscribed_at else ""])

    output.seek(0)
    return output
