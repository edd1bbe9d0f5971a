"""
In-app notification endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from app.core.database import get_db
from app.core.exceptions import NotFoundError
from app.core.timeutils import utcnow
from app.models.notification import Notification
from app.schemas.notification import NotificationResponse

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("/user/{user_id}", response_model=List[NotificationResponse])
def get_user_notifications(user_id: str, unread_only: bool = False, db: Session = Depends(get_db)):
    """Notifications of one user, newest first"""
    query = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        query = query.filter(Notification.read == False)  # noqa: E712
    return query.order_by(Notification.created_at.desc(), Notification.id.desc()).all()


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_as_read(notification_id: int, db: Session = Depends(get_db)):
    notification = db.query(Notification).filter(Notification.id == notification_id).first()
    if not notification:
        raise NotFoundError("Notification not found")

    if not notification.read:
        notification.read = True
        notification.read_at = utcnow()
        db.commit()
        db.refresh(notification)
    return notification
