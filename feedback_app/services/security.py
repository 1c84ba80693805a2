"""Password hashing and admin access tokens."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from feedback_app.config import get_settings
from feedback_app.exceptions import InvalidTokenError

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(admin_id: int, email: str, expires_minutes: Optional[int] = None) -> str:
    """Issue a signed token identifying an admin.

    Args:
        admin_id: Admin the token is for (stored as the ``sub`` claim)
        email: Admin email, carried for the client's convenience
        expires_minutes: Lifetime override; defaults to the configured lifetime

    Returns:
        Encoded JWT
    """
    settings = get_settings()
    if expires_minutes is None:
        expires_minutes = settings.access_token_expire_minutes
    payload = {
        "sub": str(admin_id),
        "email": email,
        "exp": datetime.now(tz=timezone.utc) + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int:
    """Verify a token's signature and expiry and return its admin ID.

    Args:
        token: Encoded JWT

    Returns:
        The admin ID from the ``sub`` claim

    Raises:
        InvalidTokenError: If the signature, expiry or subject is invalid
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise InvalidTokenError() from e

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError) as e:
        raise InvalidTokenError() from e
