import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from app.core.errors import ConflictError
from app.db.base import User
from app.db.session import Database

logger = logging.getLogger(__name__)


class CredentialStore:
    """Users table access. Uniqueness is left to the database constraints."""

    def __init__(self, database: Database):
        self.database = database

    def create(self, username: str, email: str, password_hash: str) -> User:
        with self.database.session() as db:
            user = User(username=username, email=email, password=password_hash)
            db.add(user)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise ConflictError(str(e.orig)) from e
            db.refresh(user)
            return user

    def get_by_email(self, email: str) -> Optional[User]:
        with self.database.session() as db:
            return db.query(User).filter(User.email == email).first()

    def get(self, user_id: int) -> Optional[User]:
        with self.database.session() as db:
            return db.get(User, user_id)

    def delete(self, user_id: int) -> int:
        """Remove a user; their categories and expenses follow via ON DELETE CASCADE."""
        with self.database.session() as db:
            affected = db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
            db.commit()
            logger.info("Deleted user %s (%s row)", user_id, affected)
            return affected
