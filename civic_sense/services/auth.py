import re
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import ExpiredSignatureError, JWTError, jwt

from civic_sense.config import Settings, get_settings

USER_ID_PATTERN = re.compile(r"^[\w@.\-+]+$")


class AuthError(Exception):
    """Base exception for auth-related errors."""

    pass


class InvalidTokenError(AuthError):
    """Exception raised when a token is invalid."""

    pass


class TokenExpiredError(AuthError):
    """Exception raised when a token has expired."""

    pass


class InvalidUserIdError(AuthError):
    """Exception raised when a token carries a malformed user identifier."""

    pass


class AuthService:
    """Service for issuing and validating bearer tokens.

    Tokens are HS256 JWTs carrying the caller's identifier in the
    ``userId`` claim. Whether that identifier belongs to a registered user
    is decided by the caller through the user registry.

    Attributes:
        secret: Secret used to sign tokens
        algorithms: List of accepted JWT algorithms
        expire_minutes: Lifetime of issued tokens
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the auth service from configuration."""
        settings = settings or get_settings()
        self.secret: str = settings.jwt_secret
        self.algorithms: list[str] = [settings.jwt_algorithm]
        self.expire_minutes: int = settings.access_token_expire_minutes

    def create_access_token(self, user_id: str) -> str:
        """Issue a token for a user identifier.

        Args:
            user_id: Identifier to embed in the ``userId`` claim

        Returns:
            The encoded JWT
        """
        now = datetime.now(UTC)
        payload = {
            "userId": user_id,
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithms[0])

    def validate_token(self, token: str) -> dict[str, Any]:
        """Validate a JWT token.

        Args:
            token: The JWT token to validate

        Returns:
            The decoded token payload

        Raises:
            InvalidTokenError: If token is invalid
            TokenExpiredError: If token has expired
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=self.algorithms)
            return cast(dict[str, Any], payload)
        except ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except JWTError as e:
            raise InvalidTokenError(f"Invalid token: {str(e)}")

    def get_user_id(self, token: str) -> str:
        """Resolve the caller's identifier from a token.

        Args:
            token: The JWT token string

        Returns:
            The sanitized user identifier

        Raises:
            InvalidTokenError: If token is invalid
            TokenExpiredError: If token has expired
            InvalidUserIdError: If the ``userId`` claim is missing or malformed
        """
        payload = self.validate_token(token)
        user_id = payload.get("userId")
        if not isinstance(user_id, str) or not USER_ID_PATTERN.match(user_id):
            raise InvalidUserIdError("Invalid userId in token")
        return user_id
