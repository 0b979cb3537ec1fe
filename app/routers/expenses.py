from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.routers.deps import get_category_store, get_current_user_id, get_expense_store
from app.schemas.category import CategoryCreated, CategoryIn, CategoryOut
from app.schemas.expense import ExpenseCreated, ExpenseIn, ExpenseOut, MessageResponse, MonthlySummary
from app.services.category_store import CategoryStore
from app.services.expense_store import ExpenseStore

router = APIRouter(prefix="/api/expenses", tags=["expenses"])


@router.get("", response_model=List[ExpenseOut])
def list_expenses(
    user_id: int = Depends(get_current_user_id),
    expenses: ExpenseStore = Depends(get_expense_store),
):
    return expenses.list_for_user(user_id)


@router.post("", response_model=ExpenseCreated, status_code=201)
def create_expense(
    payload: ExpenseIn,
    user_id: int = Depends(get_current_user_id),
    expenses: ExpenseStore = Depends(get_expense_store),
):
    expense = expenses.create(user_id, payload.amount, payload.description, payload.date, payload.category_id)
    return ExpenseCreated(id=expense.id, **payload.model_dump())


@router.get("/summary", response_model=MonthlySummary)
def monthly_summary(
    year: Optional[int] = Query(default=None, ge=1, le=9999),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    user_id: int = Depends(get_current_user_id),
    expenses: ExpenseStore = Depends(get_expense_store),
):
    # Default to the current month
    today = datetime.now()
    return expenses.monthly_summary(user_id, year or today.year, month or today.month)


@router.get("/categories", response_model=List[CategoryOut])
def list_categories(
    user_id: int = Depends(get_current_user_id),
    categories: CategoryStore = Depends(get_category_store),
):
    return categories.list_visible(user_id)


@router.post("/categories", response_model=CategoryCreated, status_code=201)
def create_category(
    payload: CategoryIn,
    user_id: int = Depends(get_current_user_id),
    categories: CategoryStore = Depends(get_category_store),
):
    category = categories.create(user_id, payload.name)
    return {"id": category.id, "name": category.name}


@router.delete("/categories/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: int,
    user_id: int = Depends(get_current_user_id),
    categories: CategoryStore = Depends(get_category_store),
):
    # Shared categories and other users' categories match nothing
    categories.delete(user_id, category_id)
    return {"message": "Category deleted successfully"}


@router.put("/{expense_id}", response_model=MessageResponse)
def update_expense(
    expense_id: int,
    payload: ExpenseIn,
    user_id: int = Depends(get_current_user_id),
    expenses: ExpenseStore = Depends(get_expense_store),
):
    # Another user's id updates 0 rows and still answers 200
    expenses.update(user_id, expense_id, payload.amount, payload.description, payload.date, payload.category_id)
    return {"message": "Expense updated successfully"}


@router.delete("/{expense_id}", response_model=MessageResponse)
def delete_expense(
    expense_id: int,
    user_id: int = Depends(get_current_user_id),
    expenses: ExpenseStore = Depends(get_expense_store),
):
    expenses.delete(user_id, expense_id)
    return {"message": "Expense deleted successfully"}
