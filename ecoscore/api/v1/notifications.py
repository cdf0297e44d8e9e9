from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from ecoscore.core.database import get_db
from ecoscore.core.dependencies import get_current_user
from ecoscore.models.user import User
from ecoscore.schemas.notification import NotificationResponse
from ecoscore.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=List[NotificationResponse])
def list_notifications(
    unsent: bool = False,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return NotificationService(db).list_for_user(current_user.id, unsent_only=unsent)


@router.post("/{notification_id}/sent", response_model=NotificationResponse)
def mark_notification_sent(
    notification_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    notification = NotificationService(db).mark_sent(notification_id, current_user.id)
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")
    return notification
