"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from board.config import AuthSettings
from board.domain.error import InvalidToken
from board.domain.value import UserId, UserRole


class TokenPayload(BaseModel):
    """JWT token payload."""

    user_id: UserId
    role: UserRole
    exp: datetime


def create_token(user_id: UserId, role: UserRole, settings: AuthSettings) -> str:
    """Create a JWT token for the user.

    Args:
        user_id: User ID
        role: User role at issue time
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expiry_minutes)

    payload = {
        # Registered claim "sub" must be a string
        "sub": str(user_id),
        "role": role.value,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        InvalidToken: If token is invalid or expired
    """
    try:
        claims = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidToken("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidToken("Invalid token") from e

    try:
        return TokenPayload(
            user_id=UserId(int(claims["sub"])),
            role=UserRole(claims["role"]),
            exp=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
        )
    except (KeyError, ValueError) as e:
        raise InvalidToken("Malformed token claims") from e
