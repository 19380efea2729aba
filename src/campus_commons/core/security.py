"""JWT helpers for issuing and reading access tokens."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from campus_commons.core.errors import UnauthorizedError
from campus_commons.core.settings import settings


def create_access_token(user_id: int, role: str = "user", expires_minutes: int | None = None) -> str:
    """Create a signed access token for ``user_id``.

    Args:
        user_id: Primary key of the authenticated user.
        role: Role claim copied into the token for client convenience; the
            server always re-reads the role from the database.
        expires_minutes: Override for the configured token lifetime.

    Returns:
        Encoded JWT string.
    """
    lifetime = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    to_encode: dict[str, Any] = {
        "sub": str(user_id),
        "role": role,
        "exp": datetime.now(UTC) + timedelta(minutes=lifetime),
    }
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> int:
    """Return the user id carried by ``token``.

    Raises:
        UnauthorizedError: If the token is malformed, expired or has no subject.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise UnauthorizedError("Could not validate credentials") from err

    subject = payload.get("sub")
    if subject is None:
        raise UnauthorizedError("Could not validate credentials")
    try:
        return int(subject)
    except (TypeError, ValueError) as err:
        raise UnauthorizedError("Could not validate credentials") from err
