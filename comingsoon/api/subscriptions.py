from __future__ import annotations

import html
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from comingsoon.core.database import get_db
from comingsoon.core.errors import ValidationError
from comingsoon.middleware.admin_auth import admin_auth
from comingsoon.services import subscription_service
from comingsoon.services.monitor_service import notify_monitor
from comingsoon.services.subscription_service import SubscribeOutcome

logger = logging.getLogger(__name__)

router = APIRouter(tags=["subscriptions"])


class EmailRequest(BaseModel):
    email: Optional[str] = None


class BulkDeleteRequest(BaseModel):
    ids: Optional[list[int]] = None


def _client_ip(request: Request) -> str:
    xf = request.headers.get("x-forwarded-for")
    if xf:
        return xf.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@router.post("/subscribe")
def subscribe(data: EmailRequest, request: Request, db: Session = Depends(get_db)):
    """Subscribe to the launch notification, or reactivate a past subscription."""
    result = subscription_service.subscribe(db, data.email)
    subscriber = result.subscriber

    if result.outcome is SubscribeOutcome.ALREADY_ACTIVE:
        return {
            "success": True,
            "message": "You are already subscribed! We will notify you as soon as the site launches.",
            "alreadySubscribed": True,
            "id": subscriber.id,
        }

    reactivated = result.outcome is SubscribeOutcome.REACTIVATED
    notify_monitor(
        ("🔁 <b>Subscription Restored</b>\n\n" if reactivated else "🟢 <b>New Subscription</b>\n\n")
        + f"📧 Email: {html.escape(subscriber.email)}\n"
        f"🕒 IP: {html.escape(_client_ip(request))}"
    )

    if reactivated:
        return {
            "success": True,
            "message": "Your subscription has been restored! We will notify you when the site launches.",
            "reactivated": True,
            "id": subscriber.id,
        }
    return {
        "success": True,
        "message": "Thank you! We will notify you when the site launches.",
        "id": subscriber.id,
    }


@router.post("/check-email")
def check_email(data: EmailRequest, db: Session = Depends(get_db)):
    row = subscription_service.check_exists(db, data.email)
    if row is None:
        return {"success": True, "exists": False}
    return {"success": True, "exists": True, "status": row.status, "id": row.id}


@router.post("/unsubscribe")
def unsubscribe(data: EmailRequest, db: Session = Depends(get_db)):
    subscription_service.unsubscribe(db, data.email)
    return {"success": True, "message": "You have been unsubscribed from notifications"}


@router.get("/subscriptions")
def list_subscriptions(db: Session = Depends(get_db), _admin: dict = Depends(admin_auth)):
    rows = subscription_service.list_subscribers(db)
    return {
        "success": True,
        "subscriptions": [r.to_dict() for r in rows],
        "count": len(rows),
    }


@router.get("/subscriptions/stats")
def subscription_stats(db: Session = Depends(get_db), _admin: dict = Depends(admin_auth)):
    return {"success": True, **subscription_service.stats(db)}


@router.get("/subscriptions/export")
def export_subscriptions(db: Session = Depends(get_db), _admin: dict = Depends(admin_auth)):
    output = subscription_service.export_csv(db)
    return StreamingResponse(
        output,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=subscriptions.csv"},
    )


@router.delete("/subscriptions/{subscriber_id}")
def delete_subscription(
    subscriber_id: int,
    db: Session = Depends(get_db),
    _admin: dict = Depends(admin_auth),
):
    subscription_service.delete_subscriber(db, subscriber_id)
    return {"success": True, "message": "Subscriber deleted"}


@router.post("/subscriptions/bulk-delete")
def bulk_delete_subscriptions(
    data: BulkDeleteRequest,
    db: Session = Depends(get_db),
    _admin: dict = Depends(admin_auth),
):
    if not data.ids:
        raise ValidationError("A list of subscriber IDs is required")

    deleted = subscription_service.bulk_delete(db, data.ids)
    return {
        "success": True,
        "message": f"Deleted {deleted} subscriber(s)",
        "deletedCount": deleted,
    }
