from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    # Only ever a bcrypt hash
    password = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Rows go away with the user through ON DELETE CASCADE in the database
    categories = relationship("Category", back_populates="owner", passive_deletes=True)
    expenses = relationship("Expense", back_populates="owner", passive_deletes=True)
