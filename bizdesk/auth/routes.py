"""
Username/password authentication endpoints
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ..config import AuthConfig
from ..models import AuthResponse, LoginRequest, ProfileResponse, UserCreate, UserPublic
from ..storage import DuplicateUserError, MemStorage, get_store
from .jwt import create_access_token, get_auth_config, get_current_user, to_public
from .passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter()


# sync: bcrypt runs in the threadpool
@router.post("/login", response_model=AuthResponse)
def login(
    credentials: LoginRequest,
    store: MemStorage = Depends(get_store),
    config: AuthConfig = Depends(get_auth_config),
):
    """Exchange username and password for a bearer token"""
    user = store.get_user_by_username(credentials.username)
    # Unknown usernames return before any hash comparison
    if user is None:
        logger.info(f"Login failed: unknown user {credentials.username!r}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    if not verify_password(credentials.password, user.password):
        logger.info(f"Login failed: wrong password for {credentials.username!r}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    return AuthResponse(token=create_access_token(user.id, config), user=to_public(user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserCreate,
    store: MemStorage = Depends(get_store),
    config: AuthConfig = Depends(get_auth_config),
):
    """Create an account and log it in"""
    try:
        user = store.create_user(
            username=user_data.username,
            password_hash=hash_password(user_data.password, rounds=config.bcrypt_rounds),
            email=user_data.email,
            name=user_data.name,
        )
    except DuplicateUserError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    logger.info(f"Registered user #{user.id} ({user.username})")

    return AuthResponse(token=create_access_token(user.id, config), user=to_public(user))


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(current_user: UserPublic = Depends(get_current_user)):
    """Get current user info"""
    return ProfileResponse(user=current_user)


@router.post("/logout")
async def logout(current_user: UserPublic = Depends(get_current_user)):
    """Logout - frontend should discard the token"""
    return {"message": "Logged out successfully"}
