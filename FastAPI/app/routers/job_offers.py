import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_company
from app.models.user import User
from app.repos import job_offer_repo
from app.schemas.job_offer import JobOfferCreate, JobOfferCreated, JobOfferResponse, JobOfferUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/job-offers", tags=["job-offers"])


def _positions(data) -> list[dict]:
    return [p.model_dump(by_alias=True) for p in data.positions]


@router.post("", response_model=JobOfferCreated, status_code=status.HTTP_201_CREATED)
def create_job_offer(
    data: JobOfferCreate,
    db: Session = Depends(get_db),
    company: User = Depends(get_current_company),
):
    try:
        offer = job_offer_repo.create(
            db,
            company.id,
            data.company_name,
            _positions(data),
            company_location=data.company_location.model_dump() if data.company_location else None,
            description=data.description,
        )
        logger.info("Job offer %s created by company=%s with %d positions", offer.id, company.id, len(offer.positions))
        return JobOfferCreated(offer_id=offer.id)
    except Exception as e:
        logger.exception("Create job offer failed for company=%s: %s", company.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal Server Error") from e


@router.get("", response_model=list[JobOfferResponse])
def list_job_offers(
    user_id: str | None = Query(None, alias="userId"),
    db: Session = Depends(get_db),
):
    offers = job_offer_repo.list_offers(db, user_id=user_id)
    return [JobOfferResponse.model_validate(o) for o in offers]


@router.get("/{offer_id}", response_model=JobOfferResponse)
def get_job_offer(offer_id: str, db: Session = Depends(get_db)):
    offer = job_offer_repo.get_by_id(db, offer_id)
    if not offer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job offer not found")
    return JobOfferResponse.model_validate(offer)


@router.patch("/{offer_id}", response_model=JobOfferResponse)
def update_job_offer(
    offer_id: str,
    data: JobOfferUpdate,
    db: Session = Depends(get_db),
    company: User = Depends(get_current_company),
):
    offer = job_offer_repo.get_for_owner(db, offer_id, company.id)
    if not offer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job offer not found or unauthorized")
    try:
        offer = job_offer_repo.update(
            db,
            offer,
            company_name=data.company_name,
            company_location=data.company_location.model_dump() if data.company_location else None,
            description=data.description,
            positions=_positions(data) if data.positions is not None else None,
        )
        logger.info("Job offer %s updated by company=%s", offer_id, company.id)
        return JobOfferResponse.model_validate(offer)
    except Exception as e:
        logger.exception("Update job offer failed for offer=%s: %s", offer_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal Server Error") from e


@router.delete("/{offer_id}")
def delete_job_offer(
    offer_id: str,
    db: Session = Depends(get_db),
    company: User = Depends(get_current_company),
):
    """Delete an owned offer. Its applications stay, flagged offerDeleted."""
    offer = job_offer_repo.get_for_owner(db, offer_id, company.id)
    if not offer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job offer not found or unauthorized")
    try:
        tombstoned = job_offer_repo.delete(db, offer)
        logger.info("Job offer %s deleted by company=%s; %d applications tombstoned", offer_id, company.id, tombstoned)
        return {"message": "Job offer deleted successfully"}
    except Exception as e:
        logger.exception("Delete job offer failed for offer=%s: %s", offer_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal Server Error") from e
