import calendar
import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from app.core.errors import ConflictError
from app.db.base import Category, Expense
from app.db.session import Database

logger = logging.getLogger(__name__)


def _month_bounds(year: int, month: int):
    # Inclusive on both ends so December of year 9999 stays representable
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


class ExpenseStore:
    """Expense rows. Every write is filtered by (id, user_id); zero matched rows is not an error."""

    def __init__(self, database: Database):
        self.database = database

    @staticmethod
    def _with_category_name(db):
        return (
            db.query(Expense, Category.name.label("category_name"))
            .outerjoin(Category, Expense.category_id == Category.id)
        )

    @staticmethod
    def _as_dict(expense: Expense, category_name: Optional[str]) -> dict:
        return {
            "id": expense.id,
            "user_id": expense.user_id,
            "category_id": expense.category_id,
            "amount": expense.amount,
            "description": expense.description,
            "date": expense.date,
            "created_at": expense.created_at,
            "category_name": category_name,
        }

    def list_for_user(self, user_id: int) -> List[dict]:
        with self.database.session() as db:
            rows = (
                self._with_category_name(db)
                .filter(Expense.user_id == user_id)
                .order_by(Expense.date.desc(), Expense.id.desc())
                .all()
            )
            return [self._as_dict(expense, name) for expense, name in rows]

    def create(self, user_id: int, amount: Decimal, description: Optional[str], on_date: date,
               category_id: Optional[int]) -> Expense:
        # category_id is taken as given; only the foreign key can reject it
        with self.database.session() as db:
            expense = Expense(
                user_id=user_id,
                amount=amount,
                description=description,
                date=on_date,
                category_id=category_id,
            )
            db.add(expense)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise ConflictError(str(e.orig)) from e
            db.refresh(expense)
            return expense

    def update(self, user_id: int, expense_id: int, amount: Decimal, description: Optional[str],
               on_date: date, category_id: Optional[int]) -> int:
        """Full replace of the mutable fields. Returns the affected-row count (0 on id/owner mismatch)."""
        with self.database.session() as db:
            try:
                affected = (
                    db.query(Expense)
                    .filter(Expense.id == expense_id, Expense.user_id == user_id)
                    .update(
                        {
                            Expense.amount: amount,
                            Expense.description: description,
                            Expense.date: on_date,
                            Expense.category_id: category_id,
                        },
                        synchronize_session=False,
                    )
                )
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise ConflictError(str(e.orig)) from e
            logger.debug("Expense update id=%s user=%s affected=%s", expense_id, user_id, affected)
            return affected

    def delete(self, user_id: int, expense_id: int) -> int:
        with self.database.session() as db:
            affected = (
                db.query(Expense)
                .filter(Expense.id == expense_id, Expense.user_id == user_id)
                .delete(synchronize_session=False)
            )
            db.commit()
            logger.debug("Expense delete id=%s user=%s affected=%s", expense_id, user_id, affected)
            return affected

    def monthly_summary(self, user_id: int, year: int, month: int, recent: int = 5) -> dict:
        start, end = _month_bounds(year, month)
        in_month = (Expense.user_id == user_id, Expense.date >= start, Expense.date <= end)

        with self.database.session() as db:
            # 1. Monthly total and count
            total, count = db.query(
                func.coalesce(func.sum(Expense.amount), 0), func.count(Expense.id)
            ).filter(*in_month).one()

            # 2. Breakdown per category (uncategorized rows group under None)
            by_category = (
                db.query(Expense.category_id, Category.name, func.sum(Expense.amount))
                .outerjoin(Category, Expense.category_id == Category.id)
                .filter(*in_month)
                .group_by(Expense.category_id, Category.name)
                .order_by(func.sum(Expense.amount).desc())
                .all()
            )

            # 3. Latest activity in the month
            latest = (
                self._with_category_name(db)
                .filter(*in_month)
                .order_by(Expense.date.desc(), Expense.id.desc())
                .limit(recent)
                .all()
            )

        return {
            "month": f"{year:04d}-{month:02d}",
            "total_expenses": Decimal(str(total)),
            "expense_count": count,
            "by_category": [
                {"category_id": category_id, "category_name": name, "total": Decimal(str(amount))}
                for category_id, name, amount in by_category
            ],
            "recent": [self._as_dict(expense, name) for expense, name in latest],
        }
