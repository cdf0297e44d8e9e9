from sqlalchemy.orm import Session
from datetime import datetime
from typing import List, Optional
import logging

from ecoscore.middleware.transaction_handler import transactional
from ecoscore.models.notification import Notification, NOTIFICATION_TYPES

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, db: Session):
        self.db = db

    @transactional
    def create(
        self,
        user_id: int,
        type: str,
        message: str,
        product_id: Optional[int] = None,
    ) -> Notification:
        if type not in NOTIFICATION_TYPES:
            raise ValueError(f"Unknown notification type: {type}")

        notification = Notification(
            user_id=user_id, type=type, message=message, product_id=product_id
        )
        self.db.add(notification)
        self.db.flush()

        logger.info(f"Notification {type} recorded for user {user_id}")
        return notification

    def list_for_user(self, user_id: int, unsent_only: bool = False) -> List[Notification]:
        query = self.db.query(Notification).filter(Notification.user_id == user_id)
        if unsent_only:
            query = query.filter(Notification.sent.is_(False))
        return query.order_by(Notification.created_at.desc()).all()

    @transactional
    def mark_sent(self, notification_id: int, user_id: int) -> Optional[Notification]:
        notification = (
            self.db.query(Notification)
            .filter(
                Notification.id == notification_id, Notification.user_id == user_id
            )
            .first()
        )
        if not notification:
            return None

        notification.sent = True
        notification.sent_at = datetime.utcnow()
        return notification
