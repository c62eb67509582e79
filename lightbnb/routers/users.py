"""
User account endpoints: registration, login and the current user.
"""

from fastapi import APIRouter, Depends, status
from typing import Any, Dict
from lightbnb.config import settings
from lightbnb.gateway import QueryGateway
from lightbnb.schemas.user import UserCreate, LoginRequest, UserResponse, AuthResponse
from lightbnb.utils.auth import create_access_token, hash_password, verify_password
from lightbnb.utils.dependencies import get_gateway, get_current_user
from lightbnb.utils.exceptions import InvalidCredentialsError
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def _auth_response(user: Dict[str, Any]) -> AuthResponse:
    return AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=create_access_token(user["id"], user["email"]),
        expires_in=settings.access_token_expire_minutes * 60
    )


@router.post(
    "",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user"
)
async def register(
    user_data: UserCreate,
    gateway: QueryGateway = Depends(get_gateway)
) -> AuthResponse:
    """
    Create an account and log it in.

    Raises:
        ConstraintViolationError: If the email is already registered (409)
    """
    user = await gateway.add_user({
        "name": user_data.name,
        "email": user_data.email,
        "password": hash_password(user_data.password),
    })
    return _auth_response(user)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="User login"
)
async def login(
    login_data: LoginRequest,
    gateway: QueryGateway = Depends(get_gateway)
) -> AuthResponse:
    """
    Authenticate user and return a bearer token.

    Raises:
        InvalidCredentialsError: If the email is unknown or the password does not match
    """
    user = await gateway.get_user_with_email(login_data.email)

    if user is None or not verify_password(login_data.password, user["password"]):
        logger.debug(f"Authentication failed for {login_data.email}")
        raise InvalidCredentialsError()

    logger.info(f"User authenticated successfully: {user['email']}")
    return _auth_response(user)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current user"
)
async def get_me(current_user: Dict[str, Any] = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(current_user)
