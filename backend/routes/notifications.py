# backend/routes/notifications.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from database import get_db
from models.notification import Notification
from utils.tokenJWT import get_session_context, SessionContext
import schemas.notification as notification_schemas

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=notification_schemas.NotificationList)
def list_notifications(
    unread_only: bool = Query(False),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    base = db.query(Notification).filter(Notification.user_id == ctx.user_id)
    unread = base.filter(Notification.read.is_(False)).count()

    query = base.filter(Notification.read.is_(False)) if unread_only else base
    items = query.order_by(Notification.created_at.desc(), Notification.id.desc()).limit(limit).all()
    return {"items": items, "unread": unread}


@router.patch("/{notification_id}/read", response_model=notification_schemas.NotificationOut)
def mark_as_read(
    notification_id: int,
    db: Session = Depends(get_db),
    ctx: SessionContext = Depends(get_session_context),
):
    notification = db.query(Notification).filter(
        Notification.id == notification_id, Notification.user_id == ctx.user_id
    ).first()
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")

    notification.read = True
    db.commit()
    db.refresh(notification)
    return notification
