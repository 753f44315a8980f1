"""Authentication and account API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from household.core import get_db
from household.middleware import extract_bearer_token, get_current_identity, get_token_service
from household.models.user import UserRole
from household.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProfileResponse,
    ProfileUpdate,
    RegisterRequest,
    UserListResponse,
    UserResponse,
)
from household.services.auth import (
    Identity,
    InsufficientRoleError,
    InvalidCredentialsError,
    TokenError,
    TokenService,
    UserExistsError,
)
from household.services.user import UserService, normalize_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    """Dependency to get user service."""
    return UserService(db)


def _require_email(email: str | None) -> str:
    if not email or not email.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email parameter is required",
        )
    return normalize_email(email)


def _require_self_or_admin(identity: Identity, email: str) -> None:
    """Only the account owner or an admin may modify an account."""
    if identity.role == UserRole.ADMIN:
        return
    if identity.email is None or normalize_email(identity.email) != email:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden - Insufficient permissions",
        )


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Register a new account.

    Returns 409 Conflict if the email is already registered.
    """
    try:
        user = await user_service.register(
            email=request.email,
            password=request.password,
            name=request.name,
            role=request.role,
        )
    except UserExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except InsufficientRoleError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
    return UserResponse.model_validate(user)


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    user_service: UserService = Depends(get_user_service),
    token_service: TokenService = Depends(get_token_service),
) -> LoginResponse:
    """Authenticate and get a bearer token valid for 24 hours."""
    try:
        user = await user_service.authenticate(email=request.email, password=request.password)
    except InvalidCredentialsError as e:
        logger.info(f"Failed login attempt for: {request.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        ) from e

    token = token_service.issue(user.id, user.role, user.email)
    logger.info(f"User logged in: {user.email}")
    return LoginResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    identity: Identity = Depends(get_current_identity),
    token_service: TokenService = Depends(get_token_service),
) -> MessageResponse:
    """Log out by blacklisting the presented token until it expires."""
    token = extract_bearer_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided",
        )

    try:
        await token_service.revoke(token)
        # Durable before the 200 is sent, not in dependency teardown
        await token_service.session.commit()
    except (TokenError, SQLAlchemyError) as e:
        # Includes NoExpiryClaimError: a token without exp cannot be blacklisted
        logger.error(f"Logout failed for {identity.subject_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error during logout",
        ) from e

    logger.info(f"User logged out: {identity.subject_id}")
    return MessageResponse(message="Logged out successfully")


@router.get("/all", response_model=UserListResponse)
async def list_users(
    _identity: Identity = Depends(get_current_identity),
    user_service: UserService = Depends(get_user_service),
) -> UserListResponse:
    """List all registered users."""
    users = await user_service.list()
    return UserListResponse(users=[UserResponse.model_validate(u) for u in users])


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    email: str | None = Query(None, description="Email of the user to retrieve"),
    _identity: Identity = Depends(get_current_identity),
    user_service: UserService = Depends(get_user_service),
) -> ProfileResponse:
    """Get a user's profile by email."""
    email = _require_email(email)
    user = await user_service.get_by_email(email)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User not found with email: {email}",
        )
    return ProfileResponse(user=UserResponse.model_validate(user))


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    data: ProfileUpdate,
    email: str | None = Query(None, description="Email of the user to update"),
    identity: Identity = Depends(get_current_identity),
    user_service: UserService = Depends(get_user_service),
) -> ProfileResponse:
    """Update a profile. Changing a role requires an admin."""
    email = _require_email(email)
    _require_self_or_admin(identity, email)

    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if "role" in changes and identity.role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden - Only an admin can change roles",
        )

    user = await user_service.update_profile(email, changes)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User not found with email: {email}",
        )
    return ProfileResponse(user=UserResponse.model_validate(user))


@router.delete("/profile", response_model=MessageResponse)
async def delete_profile(
    email: str | None = Query(None, description="Email of the user to delete"),
    identity: Identity = Depends(get_current_identity),
    user_service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Delete an account.

    Tokens already issued to the account stay valid until they expire or
    are revoked, unless VERIFY_TOKEN_SUBJECT is enabled.
    """
    email = _require_email(email)
    _require_self_or_admin(identity, email)

    if not await user_service.delete(email):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User not found with email: {email}",
        )
    return MessageResponse(message="User deleted successfully")
