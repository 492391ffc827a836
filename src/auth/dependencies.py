"""
Authentication dependencies.

Tenant endpoints depend on ``get_current_user``; the organization id in the
token is the tenant boundary for every query.
"""

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.auth.config import get_auth_settings
from src.auth.schemas import User
from src.utils.logger import logger

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    """
    Get the current user from the bearer token.

    Args:
        credentials: The HTTP authorization credentials

    Returns:
        User: The authenticated user

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired;
            500 if verification is not configured
    """
    if credentials is None:
        raise _unauthorized("No token provided")

    settings = get_auth_settings()
    if not settings.jwt_secret:
        logger.error("JWT secret not configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server configuration error",
        )

    try:
        claims = jwt.decode(
            credentials.credentials,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError as e:
        raise _unauthorized("Token expired") from e
    except jwt.InvalidTokenError as e:
        raise _unauthorized("Invalid token") from e

    user_id = claims.get("userId")
    org_id = claims.get("orgId")
    if not user_id or not org_id:
        raise _unauthorized("Invalid token")

    return User(
        id=str(user_id),
        email=claims.get("email"),
        organization_id=str(org_id),
        role=claims.get("role"),
    )
