from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from civic_sense.services.auth import (
    AuthService,
    InvalidTokenError,
    InvalidUserIdError,
    TokenExpiredError,
)

security = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str:
    """Dependency for getting the identifier of the authenticated caller.

    This dependency validates the bearer token and returns the ``userId``
    claim. Whether the identifier is a registered user is left to the
    service handling the request.

    Args:
        credentials: The HTTP Authorization header credentials

    Returns:
        The caller's user identifier

    Raises:
        HTTPException: If authentication fails
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header missing or malformed",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return AuthService().get_user_id(credentials.credentials)
    except (InvalidTokenError, TokenExpiredError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except InvalidUserIdError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
