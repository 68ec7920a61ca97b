from sqlalchemy.orm import Session

from app.core.security import generate_id
from app.models.job_offer import JobOffer
from app.repos.job_application_repo import mark_offer_deleted


def create(
    db: Session,
    user_id: str,
    company_name: str,
    positions: list[dict],
    company_location: dict | None = None,
    description: str | None = None,
) -> JobOffer:
    offer = JobOffer(
        id=generate_id(),
        user_id=user_id,
        company_name=company_name,
        company_location=company_location,
        description=description,
        positions=positions,
    )
    db.add(offer)
    db.commit()
    db.refresh(offer)
    return offer


def get_by_id(db: Session, offer_id: str) -> JobOffer | None:
    return db.query(JobOffer).filter(JobOffer.id == offer_id).first()


def get_for_owner(db: Session, offer_id: str, user_id: str) -> JobOffer | None:
    return (
        db.query(JobOffer)
        .filter(JobOffer.id == offer_id, JobOffer.user_id == user_id)
        .first()
    )


def list_offers(db: Session, user_id: str | None = None) -> list[JobOffer]:
    q = db.query(JobOffer)
    if user_id:
        q = q.filter(JobOffer.user_id == user_id)
    return q.order_by(JobOffer.created_at.desc()).all()


def list_offers_paginated(db: Session, limit: int = 10, offset: int = 0) -> tuple[list[JobOffer], int]:
    """Public listing, newest first. Returns (items, total)."""
    q = db.query(JobOffer).order_by(JobOffer.created_at.desc())
    total = q.count()
    items = q.offset(offset).limit(limit).all()
    return items, total


def update(
    db: Session,
    offer: JobOffer,
    *,
    company_name: str | None = None,
    company_location: dict | None = None,
    description: str | None = None,
    positions: list[dict] | None = None,
) -> JobOffer:
    if company_name is not None:
        offer.company_name = company_name
    if company_location is not None:
        offer.company_location = company_location
    if description is not None:
        offer.description = description
    if positions is not None:
        offer.positions = positions
    db.commit()
    db.refresh(offer)
    return offer


def delete(db: Session, offer: JobOffer, commit: bool = True) -> int:
    """Delete an offer and tombstone its applications. Returns the number of applications tombstoned."""
    tombstoned = mark_offer_deleted(db, offer.id)
    db.delete(offer)
    if commit:
        db.commit()
    return tombstoned
