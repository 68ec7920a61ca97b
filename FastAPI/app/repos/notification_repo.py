from sqlalchemy.orm import Session

from app.models.notification import Notification
from app.core.security import generate_id, utcnow


def create(
    db: Session,
    *,
    recipient_id: str,
    type: str,
    message: str,
    application_id: str | None = None,
    offer_id: str | None = None,
    interview_details: dict | None = None,
    extra_data: dict | None = None,
    commit: bool = True,
) -> Notification:
    notification = Notification(
        id=generate_id(),
        recipient_id=recipient_id,
        type=type,
        message=message,
        application_id=application_id,
        offer_id=offer_id,
        interview_details=interview_details,
        extra_data=extra_data,
        is_read=False,
        created_at=utcnow(),
        read_at=None,
    )
    db.add(notification)
    if commit:
        db.commit()
        db.refresh(notification)
    return notification


def list_for_recipient(db: Session, recipient_id: str, limit: int = 50) -> list[Notification]:
    return (
        db.query(Notification)
        .filter(Notification.recipient_id == recipient_id)
        .order_by(Notification.created_at.desc())
        .limit(limit)
        .all()
    )


def count_unread(db: Session, recipient_id: str) -> int:
    return (
        db.query(Notification)
        .filter(Notification.recipient_id == recipient_id, Notification.is_read == False)  # noqa: E712
        .count()
    )


def mark_read(db: Session, notification_id: str, recipient_id: str) -> Notification | None:
    """Ownership is part of the filter: a foreign notification is indistinguishable from a missing one."""
    notification = (
        db.query(Notification)
        .filter(Notification.id == notification_id, Notification.recipient_id == recipient_id)
        .first()
    )
    if not notification:
        return None
    notification.is_read = True
    notification.read_at = utcnow()
    db.commit()
    db.refresh(notification)
    return notification


def delete_for_application(db: Session, application_id: str, commit: bool = True) -> int:
    deleted = (
        db.query(Notification)
        .filter(Notification.application_id == application_id)
        .delete(synchronize_session=False)
    )
    if commit:
        db.commit()
    return deleted
