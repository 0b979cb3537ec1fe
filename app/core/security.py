from datetime import datetime, timezone

import bcrypt
import jwt

from app.core.config import settings
from app.core.errors import AuthenticationError


def hash_password(password: str, rounds: int = None) -> str:
    rounds = rounds or settings.BCRYPT_ROUNDS
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(user_id: int, secret: str = None, algorithm: str = None) -> str:
    """Sign a token carrying the user id.

    No ``exp`` claim is set, so a token stays valid until the secret rotates.
    """
    payload = {"userId": user_id, "iat": datetime.now(timezone.utc)}
    return jwt.encode(payload, secret or settings.JWT_SECRET, algorithm=algorithm or settings.JWT_ALGORITHM)


def decode_access_token(token: str, secret: str = None, algorithm: str = None) -> int:
    """Return the user id inside ``token`` or raise AuthenticationError."""
    if not token:
        raise AuthenticationError("Authentication required")
    try:
        payload = jwt.decode(
            token,
            secret or settings.JWT_SECRET,
            algorithms=[algorithm or settings.JWT_ALGORITHM],
        )
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")

    user_id = payload.get("userId")
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise AuthenticationError("Invalid token")
    return user_id
