import logging
from typing import Iterable, List

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError

from app.core.errors import ConflictError
from app.db.base import Category
from app.db.session import Database

logger = logging.getLogger(__name__)

DEFAULT_SHARED_CATEGORIES = ["Groceries", "Transport", "Bills", "Entertainment", "Clothing"]


class CategoryStore:
    def __init__(self, database: Database):
        self.database = database

    def list_visible(self, user_id: int) -> List[Category]:
        """The caller's own categories plus the shared ones (no owner)."""
        with self.database.session() as db:
            return (
                db.query(Category)
                .filter(or_(Category.user_id == user_id, Category.user_id.is_(None)))
                .order_by(Category.id)
                .all()
            )

    def create(self, user_id: int, name: str) -> Category:
        # Duplicate names are allowed
        with self.database.session() as db:
            category = Category(name=name, user_id=user_id)
            db.add(category)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise ConflictError(str(e.orig)) from e
            db.refresh(category)
            return category

    def delete(self, user_id: int, category_id: int) -> int:
        """Owner-scoped delete. Expenses pointing at it get category_id = NULL."""
        with self.database.session() as db:
            affected = (
                db.query(Category)
                .filter(Category.id == category_id, Category.user_id == user_id)
                .delete(synchronize_session=False)
            )
            db.commit()
            logger.debug("Category delete id=%s user=%s affected=%s", category_id, user_id, affected)
            return affected

    def seed_shared(self, names: Iterable[str] = DEFAULT_SHARED_CATEGORIES) -> int:
        with self.database.session() as db:
            existing = {
                name.lower()
                for (name,) in db.query(func.lower(Category.name)).filter(Category.user_id.is_(None)).all()
            }
            created = 0
            for name in names:
                name = name.strip()
                if not name or name.lower() in existing:
                    continue
                db.add(Category(name=name, user_id=None))
                existing.add(name.lower())
                created += 1
            if created:
                db.commit()
            logger.info("Seeded %s shared categories", created)
            return created
