import logging
import math

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.repos.user_repo import list_candidates_paginated
from app.schemas.job_offer import Pagination
from app.schemas.profile import CandidateResponse, CandidatesPage

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/candidates", tags=["candidates"])


@router.get("", response_model=CandidatesPage)
def list_candidates(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    """Public, paginated list of completed individual profiles."""
    limit = min(limit or settings.candidates_page_size, settings.candidates_max_page_size)
    candidates, total = list_candidates_paginated(db, limit=limit, offset=(page - 1) * limit)
    logger.debug("GET /api/candidates page=%d limit=%d total=%d", page, limit, total)
    return CandidatesPage(
        candidates=[CandidateResponse.model_validate(c) for c in candidates],
        pagination=Pagination(total=total, page=page, limit=limit, pages=math.ceil(total / limit)),
    )
