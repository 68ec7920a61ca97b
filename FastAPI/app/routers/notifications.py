import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.dependencies import get_current_user, get_optional_user
from app.models.user import User
from app.repos.notification_repo import count_unread, list_for_recipient, mark_read
from app.schemas.notification import NotificationCreate, NotificationResponse, UnreadCountResponse
from app.services.notification_service import create_from_client

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
def list_notifications(
    db: Session = Depends(get_db),
    user: User | None = Depends(get_optional_user),
):
    """Newest notifications for the caller. Anonymous callers get an empty list (clients poll this)."""
    if user is None:
        return []
    notifications = list_for_recipient(db, user.id, limit=settings.notifications_page_size)
    logger.debug("GET /api/notifications user=%s count=%d", user.id, len(notifications))
    return [NotificationResponse.model_validate(n) for n in notifications]


@router.get("/unread-count", response_model=UnreadCountResponse)
def unread_count(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return UnreadCountResponse(count=count_unread(db, user.id))


@router.post("", response_model=NotificationResponse)
def create_notification(
    body: NotificationCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        notification = create_from_client(
            db,
            recipient_id=body.recipient_id,
            type=body.type,
            message=body.message,
            application_id=body.application_id,
            offer_id=body.offer_id,
            company_name=body.company_name,
            interview_details=body.interview_details,
        )
        logger.info("Client notification %s created by user=%s for recipient=%s", body.type, user.id, body.recipient_id)
        return NotificationResponse.model_validate(notification)
    except Exception as e:
        logger.exception("Create notification failed for user=%s: %s", user.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error creating notification",
        ) from e


@router.patch("/{notification_id}", response_model=NotificationResponse)
def mark_notification_read(
    notification_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    notification = mark_read(db, notification_id, user.id)
    if not notification:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return NotificationResponse.model_validate(notification)
