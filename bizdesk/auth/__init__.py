"""Authentication: password hashing, bearer tokens and the auth routes."""

from .jwt import create_access_token, get_current_user, verify_token
from .passwords import hash_password, verify_password

__all__ = [
    "create_access_token",
    "get_current_user",
    "hash_password",
    "verify_password",
    "verify_token",
]
