from datetime import UTC, datetime, timedelta
from uuid import UUID

from jose import JWTError, jwt

from src.config.settings import settings


class InvalidTokenError(Exception):
    """Raised when a bearer token cannot be verified."""


def create_access_token(user_id: UUID, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> UUID:
    """Verify a bearer token and return the user id it was issued for."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        return UUID(payload["sub"])
    except (JWTError, KeyError, ValueError) as e:
        raise InvalidTokenError("Could not validate credentials") from e
