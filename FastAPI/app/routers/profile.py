import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.repos.user_repo import complete_profile, delete_user
from app.schemas.profile import ProfileResponse, ProfileSetup

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
def get_profile(user: User = Depends(get_current_user)):
    return ProfileResponse.model_validate(user)


@router.post("", response_model=ProfileResponse)
def setup_profile(
    data: ProfileSetup,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Complete the profile as an individual or a company."""
    try:
        company_details = None
        if data.user_type == "company":
            company_details = data.company_details.model_dump(by_alias=True)
        user = complete_profile(
            db,
            user,
            user_type=data.user_type,
            company_details=company_details,
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            birth_date=data.birth_date,
        )
        logger.info("Profile completed: %s as %s", user.email, user.user_type)
        return ProfileResponse.model_validate(user)
    except Exception as e:
        logger.exception("Profile setup failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update profile") from e


@router.delete("")
def delete_account(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Delete the account with its offers and job requests."""
    user_id, email = user.id, user.email
    try:
        if not delete_user(db, user_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        logger.info("Account deleted: %s", email)
        return {"message": "User and associated data deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Account delete failed for user=%s: %s", user_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete account") from e
