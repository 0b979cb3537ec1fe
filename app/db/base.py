# Import every model so Base.metadata knows the full schema (used by Alembic and create_all)
from app.db.session import Base  # noqa: F401
from app.models.user import User  # noqa: F401
from app.models.category import Category  # noqa: F401
from app.models.expense import Expense  # noqa: F401
