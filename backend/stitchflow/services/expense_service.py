# Overview: Service-layer operations for shop expenses.

from __future__ import annotations

from typing import Any

from ..models import Expense, EXPENSE_CATEGORY_RENT
from ..validation import NotFoundError, ValidationError, optional_text, to_amount
from stitchflow.time_utils import today_iso, parse_iso_datetime
from .identifier_service import new_id
from .store_service import SLICE_EXPENSES

DEFAULT_CATEGORY = EXPENSE_CATEGORY_RENT


def add_expense(state, data: dict[str, Any]) -> Expense:
    date = optional_text(data, "date") or today_iso()
    try:
        parse_iso_datetime(date)
    except ValueError:
        raise ValidationError("date must be an ISO date (YYYY-MM-DD)")

    expense = Expense(
        id=new_id(),
        category=optional_text(data, "category") or DEFAULT_CATEGORY,
        amount=to_amount(data.get("amount"), "amount"),
        date=date,
        description=optional_text(data, "description") or "",
    )
    state.upsert(SLICE_EXPENSES, expense)
    return expense


def delete_expense(state, expense_id: str) -> None:
    if not state.remove_record(SLICE_EXPENSES, expense_id):
        raise NotFoundError(f"Expense {expense_id} not found")


def total_expenses(expenses) -> int | float:
    return sum(e.amount for e in expenses)
