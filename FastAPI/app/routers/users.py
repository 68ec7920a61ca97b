import logging
import math

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.repos.job_offer_repo import list_offers_paginated
from app.models.user import USER_TYPE_INDIVIDUAL
from app.repos.job_request_repo import get_for_user as get_job_requests_for_user
from app.repos.user_repo import get_by_id
from app.schemas.job_offer import JobOfferResponse, OffersPage, Pagination
from app.schemas.job_request import JobRequestResponse
from app.schemas.profile import PublicJobRequests, PublicUserResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/offers", response_model=OffersPage)
def list_public_offers(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    """Public, paginated offers, newest first."""
    limit = min(limit or settings.offers_page_size, settings.offers_max_page_size)
    offers, total = list_offers_paginated(db, limit=limit, offset=(page - 1) * limit)
    return OffersPage(
        offers=[JobOfferResponse.model_validate(o) for o in offers],
        pagination=Pagination(total=total, page=page, limit=limit, pages=math.ceil(total / limit)),
    )


@router.get("/{user_id}", response_model=PublicUserResponse)
def get_public_user(user_id: str, db: Session = Depends(get_db)):
    user = get_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return PublicUserResponse.model_validate(user)


@router.get("/{user_id}/job-requests", response_model=PublicJobRequests)
def get_public_job_requests(user_id: str, db: Session = Depends(get_db)):
    """An individual's public profile with their job requests, newest first."""
    user = get_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if user.user_type != USER_TYPE_INDIVIDUAL:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User is not an individual")
    requests = get_job_requests_for_user(db, user.id)
    return PublicJobRequests(
        profile=PublicUserResponse.model_validate(user),
        requests=[JobRequestResponse.model_validate(r) for r in requests],
    )
