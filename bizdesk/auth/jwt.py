"""
JWT Token Authentication
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from ..config import AuthConfig
from ..models import User, UserPublic
from ..storage import MemStorage, get_store

logger = logging.getLogger(__name__)

# Missing credentials are reported by get_current_user, not by HTTPBearer
security = HTTPBearer(auto_error=False)


def get_auth_config(request: Request) -> AuthConfig:
    return request.app.state.settings.auth


def create_access_token(user_id: int, config: AuthConfig, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed token whose only claim is the user id"""
    if expires_delta is None:
        expires_delta = timedelta(minutes=config.token_expire_minutes)
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, config.jwt_secret, algorithm=config.algorithm)


def verify_token(token: str, config: AuthConfig) -> Optional[int]:
    """Decode a token and return its user id, or None if invalid or expired"""
    try:
        payload = jwt.decode(token, config.jwt_secret, algorithms=[config.algorithm])
    except JWTError:
        return None
    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        return None
    return int(subject)


def to_public(user: User) -> UserPublic:
    return UserPublic(id=user.id, username=user.username, email=user.email, name=user.name)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    config: AuthConfig = Depends(get_auth_config),
    store: MemStorage = Depends(get_store),
) -> UserPublic:
    """Resolve the authenticated user from the bearer token"""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
        )

    user_id = verify_token(credentials.credentials, config)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token",
        )

    user = store.get_user(user_id)
    if user is None:
        logger.warning(f"Token for unknown user #{user_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User not found",
        )
    return to_public(user)
