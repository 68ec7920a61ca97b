import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.security import decode_access_token
from app.database import get_db
from app.models.user import USER_TYPE_COMPANY, USER_TYPE_INDIVIDUAL
from app.repos.user_repo import get_by_email, get_or_create_by_email

logger = logging.getLogger(__name__)
bearer = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
):
    """Resolve the session principal (email) to a user, provisioning it on first sign-in."""
    if credentials is None:
        logger.info("Auth rejected: no bearer token")
        raise _unauthorized("Not authenticated")
    email = decode_access_token(credentials.credentials)
    if email is None:
        logger.info("Auth rejected: token invalid, expired or without an email subject")
        raise _unauthorized("Invalid or expired token")
    return get_or_create_by_email(db, email)


def get_optional_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
):
    """Like get_current_user but returns None instead of 401, and never provisions."""
    email = decode_access_token(credentials.credentials) if credentials else None
    return get_by_email(db, email) if email else None


def _require_user_type(user, user_type: str, detail: str):
    if getattr(user, "user_type", None) != user_type:
        logger.info("Forbidden: user=%s type=%s needs %s", getattr(user, "id", None), getattr(user, "user_type", None), user_type)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
    return user


def get_current_company(user=Depends(get_current_user)):
    return _require_user_type(user, USER_TYPE_COMPANY, "Company access only")


def get_current_individual(user=Depends(get_current_user)):
    return _require_user_type(user, USER_TYPE_INDIVIDUAL, "Individual access only")
