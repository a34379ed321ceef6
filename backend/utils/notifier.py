# backend/utils/notifier.py
import logging

from sqlalchemy.orm import Session

import database
from models.notification import Notification
from models.store import Store
from utils.events import subscribe, LowStockDetected

logger = logging.getLogger(__name__)


def send_in_app_notification(db: Session, user_id: int, title: str, body: str, type: str = "info") -> Notification:
    notification = Notification(user_id=user_id, title=title, body=body, type=type, read=False)
    db.add(notification)
    db.commit()
    db.refresh(notification)
    logger.info("Notification %s sent to user %s", notification.id, user_id)
    return notification


@subscribe(LowStockDetected)
def notify_low_stock(event: LowStockDetected) -> None:
    # Runs outside the request, so it opens its own session
    with database.SessionLocal() as db:
        store = db.get(Store, event.store_id)
        if store is None:
            logger.warning("Low stock for unknown store %s", event.store_id)
            return
        send_in_app_notification(
            db,
            store.owner_id,
            "Low Stock Alert!",
            f'Product "{event.product_name}" is running low (Stock: {event.stock}).',
            type="warning",
        )
