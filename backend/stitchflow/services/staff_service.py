# Overview: Service-layer operations for staff; accounts, salary disbursement and workload.

"""
Staff Service

SALARY NOTES:
- Paying a salary appends an Expense (category "Salary", dated today) and
  stamps last_salary_paid on the staff record, in one snapshot write.
- There is no duplicate-payment guard: paying twice in a period records two
  expenses. A repeat within the same calendar month is logged as a warning.
"""

from __future__ import annotations

import dataclasses
from typing import Any

from flask import current_app

from ..models import User, Expense, ROLE_OWNER, ROLE_TAILOR, VALID_ROLES, EXPENSE_CATEGORY_SALARY
from ..validation import (
    ValidationError,
    ConflictError,
    NotFoundError,
    require_text,
    require_choice,
    to_amount,
)
from stitchflow.time_utils import today_iso
from .identifier_service import new_id
from .store_service import SLICE_STAFF, SLICE_EXPENSES
from . import reporting_service


class StaffError(ValidationError):
    """Raised for staff operations that break a business rule."""
    pass


def get_staff(state, staff_id: str) -> User:
    member = state.find(SLICE_STAFF, staff_id)
    if member is None:
        raise NotFoundError(f"Staff member {staff_id} not found")
    return member


def find_by_username(staff, username: str) -> User | None:
    username = (username or "").strip().lower()
    for member in staff:
        if member.username.lower() == username:
            return member
    return None


def add_staff(state, data: dict[str, Any]) -> User:
    """
    Add a staff account. Usernames are stored lowercased and must be unique,
    since sign-in resolves a single account by username.
    """
    name = require_text(data, "name", "Name")
    username = require_text(data, "username", "Username").lower()
    role = require_choice(data.get("role", ROLE_TAILOR), VALID_ROLES, "role")
    salary = to_amount(data.get("salary"), "salary", default=0)

    if find_by_username(state.staff, username) is not None:
        raise ConflictError(f"Username '{username}' is already taken")

    member = User(
        id=new_id(),
        name=name,
        role=role,
        username=username,
        salary=salary or None,
    )
    state.upsert(SLICE_STAFF, member)
    current_app.logger.info("Added %s account %s (%s)", role, username, member.id)
    return member


def delete_staff(state, staff_id: str) -> None:
    """Remove a staff account. Owner accounts cannot be removed."""
    member = get_staff(state, staff_id)
    if member.role == ROLE_OWNER:
        raise StaffError("Owner accounts cannot be deleted")
    state.remove_record(SLICE_STAFF, staff_id)
    current_app.logger.info("Deleted staff account %s", member.username)


def pay_salary(member: User, *, paid_on: str) -> tuple[User, Expense]:
    """
    Build the salary expense and the stamped staff record for a payment.

    Raises:
        StaffError: If the staff member has no positive salary configured
    """
    if not member.salary or member.salary <= 0:
        raise StaffError(f"{member.name} has no salary configured")

    expense = Expense(
        id=new_id(),
        category=EXPENSE_CATEGORY_SALARY,
        amount=member.salary,
        date=paid_on,
        description=f"Salary payment to {member.name}",
    )
    return dataclasses.replace(member, last_salary_paid=paid_on), expense


def disburse_salary(state, staff_id: str) -> tuple[User, Expense]:
    """Pay a staff member's salary today and persist both records."""
    member = get_staff(state, staff_id)
    today = today_iso()

    if member.last_salary_paid and member.last_salary_paid[:7] == today[:7]:
        current_app.logger.warning(
            "Salary for %s already paid on %s; recording another payment",
            member.username, member.last_salary_paid,
        )

    updated, expense = pay_salary(member, paid_on=today)
    state.replace_many({
        SLICE_STAFF: state.with_record(SLICE_STAFF, updated),
        SLICE_EXPENSES: state.with_record(SLICE_EXPENSES, expense),
    })
    if state.current_user is not None and state.current_user.id == updated.id:
        state.set_current_user(updated)

    current_app.logger.info("Paid salary %s to %s", expense.amount, member.username)
    return updated, expense


def performance(state, staff_id: str) -> dict:
    member = get_staff(state, staff_id)
    result = reporting_service.staff_performance(state.orders, member.id)
    result["name"] = member.name
    return result
