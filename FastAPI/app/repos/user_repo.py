import logging
from datetime import date

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.user import USER_TYPE_INDIVIDUAL, User
from app.core.security import generate_id

logger = logging.getLogger(__name__)


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create(db: Session, email: str) -> User:
    user = User(
        id=generate_id(),
        email=email,
        is_profile_complete=False,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def get_or_create_by_email(db: Session, email: str) -> User:
    """First authenticated request for an email provisions an incomplete user."""
    user = get_by_email(db, email)
    if user:
        return user
    user = create(db, email)
    logger.info("Provisioned user on first sign-in: %s", email)
    return user


def list_candidates_paginated(db: Session, limit: int = 12, offset: int = 0) -> tuple[list[User], int]:
    """Completed individual profiles, most recently updated first. Returns (items, total)."""
    q = (
        db.query(User)
        .filter(User.user_type == USER_TYPE_INDIVIDUAL, User.is_profile_complete.is_(True))
        .order_by(func.coalesce(User.updated_at, User.created_at).desc(), User.created_at.desc())
    )
    total = q.count()
    items = q.offset(offset).limit(limit).all()
    return items, total


def complete_profile(
    db: Session,
    user: User,
    *,
    user_type: str,
    company_details: dict | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
    phone: str | None = None,
    birth_date: date | None = None,
) -> User:
    user.user_type = user_type
    user.is_profile_complete = True
    if company_details is not None:
        user.company_details = company_details
    if first_name is not None:
        user.first_name = first_name
    if last_name is not None:
        user.last_name = last_name
    if phone is not None:
        user.phone = phone
    if birth_date is not None:
        user.birth_date = birth_date
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: str) -> bool:
    """Delete user with their offers and job requests in one transaction. Returns True if deleted.

    Applications against the deleted offers are tombstoned, not removed.
    """
    from app.repos import job_offer_repo, job_request_repo

    user = get_by_id(db, user_id)
    if not user:
        return False
    offers = job_offer_repo.list_offers(db, user_id=user_id)
    for offer in offers:
        job_offer_repo.delete(db, offer, commit=False)
    requests_deleted = job_request_repo.delete_all_for_user(db, user_id, commit=False)
    db.delete(user)
    db.commit()
    logger.info("Deleted user %s with %d offers and %d job requests", user_id, len(offers), requests_deleted)
    return True
