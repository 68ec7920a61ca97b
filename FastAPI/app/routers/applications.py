import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import (
    get_current_company,
    get_current_individual,
    get_current_user,
    get_optional_user,
)
from app.models.job_application import APPLICATION_STATUSES, POSITION_STATUSES
from app.models.user import User
from app.schemas.application import (
    ApplicationResponse,
    ApplyRequest,
    HasAppliedResponse,
    InterviewRequest,
    MyApplicationResponse,
    PositionStatusUpdate,
    StatusUpdate,
)
from app.services import application_service
from app.services.errors import ApplicationError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/jobs", tags=["applications"])


def _http_error(e: ApplicationError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.detail)


def _require_status(value: str | None, allowed: tuple[str, ...]) -> str:
    if not value:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="status is required")
    if value not in allowed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"status must be one of: {', '.join(allowed)}",
        )
    return value


# ---- candidate: apply ----


@router.post("/apply/{offer_id}")
def apply_to_offer(
    offer_id: str,
    body: ApplyRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_individual),
):
    """Submit one application covering the selected positions of an offer."""
    if not body.position_titles:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Select at least one position")
    try:
        application = application_service.submit_application(
            db,
            offer_id,
            user,
            body.position_titles,
            company_id=body.company_id,
        )
        return {"message": "Application submitted successfully", "applicationId": application.id}
    except ApplicationError as e:
        raise _http_error(e) from e
    except Exception as e:
        logger.exception("Apply failed for offer=%s user=%s: %s", offer_id, user.email, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit application",
        ) from e


@router.get("/apply/{offer_id}", response_model=HasAppliedResponse)
def check_has_applied(
    offer_id: str,
    db: Session = Depends(get_db),
    user: User | None = Depends(get_optional_user),
):
    if user is None:
        return HasAppliedResponse(has_applied=False)
    return HasAppliedResponse(has_applied=application_service.has_applied(db, offer_id, user.email))


# ---- shared / company views ----


@router.get("/applications", response_model=list[ApplicationResponse])
def list_applications(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Company: applications received. Otherwise: applications sent. Newest first."""
    applications = application_service.list_for_actor(db, user)
    logger.debug("GET /api/jobs/applications user=%s type=%s count=%d", user.id, user.user_type, len(applications))
    return [ApplicationResponse.model_validate(a) for a in applications]


@router.get("/applications/{application_id}", response_model=ApplicationResponse)
def get_application_raw(
    application_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        application = application_service.get_for_actor(db, application_id, user)
        return ApplicationResponse.model_validate(application)
    except ApplicationError as e:
        raise _http_error(e) from e


@router.patch("/applications/{application_id}", response_model=ApplicationResponse)
def set_application_status(
    application_id: str,
    body: StatusUpdate,
    db: Session = Depends(get_db),
    company: User = Depends(get_current_company),
):
    """Set the overall status and every position to it. No notification."""
    new_status = _require_status(body.status, APPLICATION_STATUSES)
    try:
        application = application_service.update_status(db, application_id, company, new_status, notify=False)
        return ApplicationResponse.model_validate(application)
    except ApplicationError as e:
        raise _http_error(e) from e
    except Exception as e:
        logger.exception("Status update failed for application=%s: %s", application_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error updating application status",
        ) from e


@router.patch("/applications/{application_id}/status", response_model=ApplicationResponse)
def set_application_status_and_notify(
    application_id: str,
    body: StatusUpdate,
    db: Session = Depends(get_db),
    company: User = Depends(get_current_company),
):
    """Same as PATCH /applications/{id}, plus an application_status notification to the applicant."""
    new_status = _require_status(body.status, APPLICATION_STATUSES)
    try:
        application = application_service.update_status(db, application_id, company, new_status, notify=True)
        return ApplicationResponse.model_validate(application)
    except ApplicationError as e:
        raise _http_error(e) from e
    except Exception as e:
        logger.exception("Status update (notify) failed for application=%s: %s", application_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error updating application status",
        ) from e


@router.patch("/applications/{application_id}/positions", response_model=ApplicationResponse)
def set_position_status(
    application_id: str,
    body: PositionStatusUpdate,
    db: Session = Depends(get_db),
    company: User = Depends(get_current_company),
):
    """Update one position and refold the overall status."""
    if not body.position_title or not body.status:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="positionTitle and status are required")
    new_status = _require_status(body.status, POSITION_STATUSES)
    try:
        application = application_service.update_position_status(
            db, application_id, company, body.position_title, new_status
        )
        return ApplicationResponse.model_validate(application)
    except ApplicationError as e:
        raise _http_error(e) from e
    except Exception as e:
        logger.exception("Position update failed for application=%s: %s", application_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error updating position status",
        ) from e


@router.post("/applications/{application_id}/interview", response_model=ApplicationResponse)
def schedule_interview(
    application_id: str,
    body: InterviewRequest,
    db: Session = Depends(get_db),
    company: User = Depends(get_current_company),
):
    try:
        application = application_service.schedule_interview(
            db, application_id, company, body.model_dump(exclude_none=True)
        )
        return ApplicationResponse.model_validate(application)
    except ApplicationError as e:
        raise _http_error(e) from e
    except Exception as e:
        logger.exception("Interview scheduling failed for application=%s: %s", application_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error scheduling interview",
        ) from e


@router.delete("/applications/{application_id}")
def delete_application(
    application_id: str,
    db: Session = Depends(get_db),
    company: User = Depends(get_current_company),
):
    try:
        application_service.delete_for_company(db, application_id, company)
        return {"message": "Application deleted successfully"}
    except ApplicationError as e:
        raise _http_error(e) from e
    except Exception as e:
        logger.exception("Delete failed for application=%s: %s", application_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error deleting application",
        ) from e


# ---- candidate views ----


@router.get("/my-applications", response_model=list[MyApplicationResponse])
def list_my_applications(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_individual),
):
    try:
        rows = application_service.list_for_applicant(db, user.email)
        return [MyApplicationResponse.model_validate(r) for r in rows]
    except Exception as e:
        logger.exception("Listing applications failed for user=%s: %s", user.email, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching applications",
        ) from e


@router.get("/my-applications/{application_id}", response_model=MyApplicationResponse)
def get_my_application(
    application_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_individual),
):
    try:
        row = application_service.get_for_applicant(db, application_id, user.email)
        return MyApplicationResponse.model_validate(row)
    except ApplicationError as e:
        raise _http_error(e) from e
    except Exception as e:
        logger.exception("Fetching application=%s failed for user=%s: %s", application_id, user.email, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching application",
        ) from e


@router.delete("/my-applications/{application_id}")
def withdraw_my_application(
    application_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_individual),
):
    try:
        application_service.delete_for_applicant(db, application_id, user.email)
        return {"message": "Application deleted successfully"}
    except ApplicationError as e:
        raise _http_error(e) from e
    except Exception as e:
        logger.exception("Withdraw failed for application=%s user=%s: %s", application_id, user.email, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error deleting application",
        ) from e
