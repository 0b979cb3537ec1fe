import logging

from app.core.errors import AuthenticationError
from app.core.security import create_access_token, hash_password, verify_password
from app.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)

# Same text for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    def __init__(self, users: CredentialStore, settings):
        self.users = users
        self.settings = settings

    def _issue(self, user_id: int) -> str:
        return create_access_token(user_id, self.settings.JWT_SECRET, self.settings.JWT_ALGORITHM)

    def register(self, username: str, email: str, password: str) -> dict:
        hashed = hash_password(password, rounds=self.settings.BCRYPT_ROUNDS)
        user = self.users.create(username, email, hashed)
        logger.info("Registered user %s", user.id)
        return {"token": self._issue(user.id), "userId": user.id}

    def login(self, email: str, password: str) -> dict:
        user = self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password):
            logger.warning("Failed login attempt")
            raise AuthenticationError(INVALID_CREDENTIALS)
        logger.info("User %s logged in", user.id)
        return {"token": self._issue(user.id), "userId": user.id, "username": user.username}
