from datetime import date as Date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator

TWO_PLACES = Decimal("0.01")
# NUMERIC(10, 2) leaves eight integer digits
MAX_AMOUNT = Decimal("99999999.99")


def to_money(value) -> Decimal:
    return Decimal(str(value if value is not None else 0)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class ExpenseIn(BaseModel):
    """Body for create and for full-replace update."""

    amount: Decimal
    description: Optional[str] = None
    date: Date
    category_id: Optional[int] = None

    @field_validator("amount")
    @classmethod
    def _round_amount(cls, value: Decimal) -> Decimal:
        if not value.is_finite():
            raise ValueError("amount must be a finite number")
        # Range check first: quantize fails outright on very large exponents
        if abs(value) >= MAX_AMOUNT + Decimal("0.005"):
            raise ValueError("amount is out of range")
        return to_money(value)

    @field_serializer("amount")
    def _amount(self, value: Decimal) -> str:
        return str(to_money(value))


class ExpenseCreated(ExpenseIn):
    id: int


class ExpenseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    category_id: Optional[int] = None
    amount: Decimal
    description: Optional[str] = None
    date: Date
    created_at: Optional[datetime] = None
    category_name: Optional[str] = None

    @field_serializer("amount")
    def _amount(self, value: Decimal) -> str:
        return str(to_money(value))


class MessageResponse(BaseModel):
    message: str


class CategoryTotal(BaseModel):
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    total: Decimal

    @field_serializer("total")
    def _total(self, value: Decimal) -> str:
        return str(to_money(value))


class MonthlySummary(BaseModel):
    month: str
    total_expenses: Decimal
    expense_count: int
    by_category: List[CategoryTotal]
    recent: List[ExpenseOut]

    @field_serializer("total_expenses")
    def _total(self, value: Decimal) -> str:
        return str(to_money(value))
