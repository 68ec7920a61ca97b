import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.repos import job_request_repo
from app.schemas.job_request import JobRequestCreate, JobRequestCreated, JobRequestResponse, JobRequestUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/request-job", tags=["job-requests"])


@router.post("", response_model=JobRequestCreated, status_code=status.HTTP_201_CREATED)
def create_job_request(
    data: JobRequestCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        job_request = job_request_repo.create(db, user.id, data.model_dump())
        logger.info("Job request %s created by user=%s", job_request.id, user.id)
        return JobRequestCreated(request_id=job_request.id)
    except Exception as e:
        logger.exception("Create job request failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal Server Error") from e


@router.get("", response_model=list[JobRequestResponse])
def list_my_job_requests(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return [JobRequestResponse.model_validate(r) for r in job_request_repo.get_for_user(db, user.id)]


@router.patch("/{request_id}", response_model=JobRequestResponse)
def update_job_request(
    request_id: str,
    data: JobRequestUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    job_request = job_request_repo.update(db, request_id, user.id, data.model_dump(exclude_unset=True))
    if not job_request:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job request not found")
    return JobRequestResponse.model_validate(job_request)


@router.delete("/{request_id}")
def delete_job_request(
    request_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if job_request_repo.delete(db, request_id, user.id):
        return {"message": "Job request deleted successfully"}
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job request not found")
