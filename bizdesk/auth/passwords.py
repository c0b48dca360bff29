"""Password hashing (bcrypt)."""

import bcrypt

# bcrypt only looks at the first 72 bytes of the secret
MAX_PASSWORD_BYTES = 72


def _secret(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password with a fresh salt."""
    return bcrypt.hashpw(_secret(password), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, hashed: str) -> bool:
    """Compare a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_secret(password), hashed.encode("ascii"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
