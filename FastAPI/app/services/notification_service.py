"""
Notification emitter: pre-renders messages and writes notification rows.

Emit helpers only add rows to the caller's session (commit=False by default) so the
lifecycle change and its notification land in the same transaction.
"""
import logging

from sqlalchemy.orm import Session

from app.config import settings
from app.models.job_application import (
    JobApplication,
    STATUS_ACCEPTED,
    STATUS_INTERVIEW_SCHEDULED,
    STATUS_PENDING,
    STATUS_REJECTED,
)
from app.models.notification import (
    Notification,
    TYPE_APPLICATION_ACCEPTED,
    TYPE_APPLICATION_STATUS,
    TYPE_INTERVIEW_SCHEDULED,
    TYPE_JOB_APPLICATION,
)
from app.repos import notification_repo

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"

MESSAGES = {
    "en": {
        "new_application": "New job application received from {applicant_name}",
        "status_accepted": "Your application at {company_name} has been accepted",
        "status_rejected": "Your application at {company_name} has been rejected",
        "status_pending": "Your application at {company_name} is back under review",
        "status_interview_scheduled": "You have been invited to an interview by {company_name}",
        "interview_scheduled": "You have been invited to an interview by {company_name}",
        "application_accepted": "Interview scheduled with {company_name}",
    },
    "ar": {
        "new_application": "تم استلام طلب توظيف جديد من {applicant_name}",
        "status_accepted": "تم قبول طلبك للوظيفة في {company_name}",
        "status_rejected": "تم رفض طلبك للوظيفة في {company_name}",
        "status_pending": "طلبك للوظيفة في {company_name} قيد المراجعة من جديد",
        "status_interview_scheduled": "تم استدعائك لمقابلة عمل من قبل {company_name}",
        "interview_scheduled": "تم استدعائك لمقابلة عمل من قبل {company_name}",
        "application_accepted": "تمت جدولة مقابلة مع {company_name}",
    },
}

_STATUS_KEYS = {
    STATUS_ACCEPTED: "status_accepted",
    STATUS_REJECTED: "status_rejected",
    STATUS_PENDING: "status_pending",
    STATUS_INTERVIEW_SCHEDULED: "status_interview_scheduled",
}


def render_message(key: str, locale: str | None = None, **params) -> str:
    catalog = MESSAGES.get((locale or settings.notification_locale or DEFAULT_LOCALE).lower())
    if catalog is None:
        catalog = MESSAGES[DEFAULT_LOCALE]
    template = catalog.get(key) or MESSAGES[DEFAULT_LOCALE][key]
    return template.format(**{k: (v if v is not None else "") for k, v in params.items()})


def emit(
    db: Session,
    recipient_id: str,
    type: str,
    message: str,
    application_id: str | None = None,
    *,
    offer_id: str | None = None,
    interview_details: dict | None = None,
    extra_data: dict | None = None,
    commit: bool = False,
) -> Notification:
    """Plain insert. No idempotency key: calling twice stores two notifications."""
    notification = notification_repo.create(
        db,
        recipient_id=recipient_id,
        type=type,
        message=message,
        application_id=application_id,
        offer_id=offer_id,
        interview_details=interview_details,
        extra_data=extra_data,
        commit=commit,
    )
    logger.info("Notification %s queued for recipient=%s application=%s", type, recipient_id, application_id)
    return notification


def notify_new_application(db: Session, application: JobApplication) -> Notification:
    titles = [p["title"] for p in application.positions or []]
    return emit(
        db,
        application.company_id,
        TYPE_JOB_APPLICATION,
        render_message("new_application", applicant_name=application.applicant_name),
        application.id,
        offer_id=application.offer_id,
        extra_data={"positions": titles, "applicantName": application.applicant_name},
    )


def notify_status_change(db: Session, application: JobApplication, status: str, company_name: str | None) -> Notification:
    return emit(
        db,
        application.applicant_id,
        TYPE_APPLICATION_STATUS,
        render_message(_STATUS_KEYS.get(status, "status_pending"), company_name=company_name),
        application.id,
        offer_id=application.offer_id,
        extra_data={"status": status},
    )


def notify_interview_scheduled(
    db: Session, application: JobApplication, interview_details: dict, company_name: str | None
) -> Notification:
    return emit(
        db,
        application.applicant_id,
        TYPE_INTERVIEW_SCHEDULED,
        render_message("interview_scheduled", company_name=company_name),
        application.id,
        offer_id=application.offer_id,
        interview_details={**interview_details, "companyName": company_name},
    )


def create_from_client(
    db: Session,
    *,
    recipient_id: str,
    type: str,
    message: str | None,
    application_id: str | None = None,
    offer_id: str | None = None,
    company_name: str | None = None,
    interview_details: dict | None = None,
) -> Notification:
    """Client-originated notification (POST /api/notifications)."""
    if type == TYPE_APPLICATION_ACCEPTED:
        message = render_message("application_accepted", company_name=company_name)
    return emit(
        db,
        recipient_id,
        type,
        message or "",
        application_id,
        offer_id=offer_id,
        interview_details=interview_details,
        commit=True,
    )
