from datetime import datetime, timedelta, timezone
from uuid import uuid4

from jose import JWTError, jwt

from app.config import settings


def create_access_token(email: str, expires_minutes: int | None = None) -> str:
    """Mint a session token for an email principal (the identity provider does the same)."""
    minutes = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    to_encode = {"sub": email, "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> str | None:
    """Return the principal email carried by the token, or None if invalid/expired."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    email = payload.get("sub")
    if not email or "@" not in email:
        return None
    return email.strip().lower()


def generate_id() -> str:
    """24-hex-character document id."""
    return uuid4().hex[:24]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
