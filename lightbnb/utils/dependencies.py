"""
FastAPI dependency injection utilities for the gateway and authentication.
"""

from typing import Any, Dict, Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from lightbnb.database import Database
from lightbnb.gateway import QueryGateway
from lightbnb.utils.auth import verify_token
from lightbnb.utils.exceptions import UnauthorizedError, InvalidTokenError, NotFoundError


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


def get_database(request: Request) -> Database:
    """The Database handle created by the application lifespan."""
    return request.app.state.database


def get_gateway(database: Database = Depends(get_database)) -> QueryGateway:
    return QueryGateway(database)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    gateway: QueryGateway = Depends(get_gateway)
) -> Dict[str, Any]:
    """
    Get current authenticated user from JWT token.

    Raises:
        UnauthorizedError: If no token provided
        InvalidTokenError: If the token is invalid or expired
        NotFoundError: If the token refers to a user that no longer exists
    """
    if not credentials:
        raise UnauthorizedError("Authentication token required")

    try:
        payload = verify_token(credentials.credentials)
    except JWTError as e:
        raise InvalidTokenError(f"Invalid token: {e}")

    user = await gateway.get_user_with_id(payload.user_id)
    if user is None:
        raise NotFoundError("User", payload.user_id)

    return user
