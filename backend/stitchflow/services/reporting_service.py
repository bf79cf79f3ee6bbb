# Overview: Service-layer aggregation for dashboard, reports and staff performance.

"""
Reporting and aggregation

All functions here are pure: they take record lists and return JSON-ready
dicts, recomputed on every read. Nothing is cached.

KNOWN LIMITATION: the monthly series buckets by month-of-year only, so the
same month of different years lands in one bucket.
"""

from __future__ import annotations

from typing import Iterable

from ..models import Order, Expense, InventoryItem, User
from stitchflow.money import percentage
from stitchflow.time_utils import year_of, month_index_of


MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

RECENT_ORDER_COUNT = 5


# =============================================================================
# FINANCIAL TOTALS
# =============================================================================

def financial_summary(orders: Iterable[Order], expenses: Iterable[Expense]) -> dict:
    """
    Revenue/expense/profit totals.

    total_revenue is billed revenue (sum of order totals), not cash received;
    tax_liability is the tax component of those totals.
    """
    orders = list(orders)
    total_revenue = sum(o.total_amount for o in orders)
    total_expenses = sum(e.amount for e in expenses)
    return {
        "total_revenue": total_revenue,
        "total_expenses": total_expenses,
        "profit": total_revenue - total_expenses,
        "tax_liability": sum(o.tax_amount for o in orders),
    }


def expenses_by_category(expenses: Iterable[Expense]) -> list[dict]:
    """Sum expense amounts per category, in order of first appearance."""
    totals: dict[str, int | float] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, 0) + expense.amount
    return [{"category": name, "amount": amount} for name, amount in totals.items()]


def monthly_series(orders: Iterable[Order], expenses: Iterable[Expense]) -> list[dict]:
    """
    Twelve calendar-month buckets (Jan..Dec) of income and expense.

    Orders bucket by created_at, expenses by date. Years are ignored.
    Records with unparseable dates are left out.
    """
    income = [0] * 12
    spent = [0] * 12
    for order in orders:
        idx = month_index_of(order.created_at)
        if idx is not None:
            income[idx] += order.total_amount
    for expense in expenses:
        idx = month_index_of(expense.date)
        if idx is not None:
            spent[idx] += expense.amount
    return [
        {"month": label, "income": income[i], "expense": spent[i]}
        for i, label in enumerate(MONTH_LABELS)
    ]


# =============================================================================
# INVENTORY
# =============================================================================

def is_low_stock(item: InventoryItem) -> bool:
    """Stock at or below the threshold counts as low."""
    return item.stock <= item.low_stock_threshold


def low_stock_items(inventory: Iterable[InventoryItem]) -> list[InventoryItem]:
    return [item for item in inventory if is_low_stock(item)]


# =============================================================================
# ORDERS / CUSTOMERS
# =============================================================================

def active_orders(orders: Iterable[Order]) -> list[Order]:
    return [o for o in orders if not o.is_delivered]


def delivery_efficiency(orders: Iterable[Order]) -> int:
    """Percentage of all orders that are delivered (0 with no orders)."""
    orders = list(orders)
    delivered = sum(1 for o in orders if o.is_delivered)
    return percentage(delivered, len(orders))


def yearly_order_summary(orders: Iterable[Order], customer_id: str | None = None) -> list[dict]:
    """
    Group orders by year(created_at), newest year first.

    With customer_id, only that customer's orders are considered.
    """
    buckets: dict[int, dict] = {}
    for order in orders:
        if customer_id is not None and order.customer_id != customer_id:
            continue
        year = year_of(order.created_at)
        if year is None:
            continue
        bucket = buckets.setdefault(year, {"year": year, "order_count": 0, "total_spend": 0})
        bucket["order_count"] += 1
        bucket["total_spend"] += order.total_amount
    return [buckets[year] for year in sorted(buckets, reverse=True)]


# =============================================================================
# STAFF
# =============================================================================

def staff_performance(orders: Iterable[Order], staff_id: str) -> dict:
    """
    Workload and completion rate for one staff member.

    completion_rate = round(100 * completed / (active + completed)), or 0
    when the staff member has no assigned orders.
    """
    active = 0
    completed = 0
    for order in orders:
        if order.assigned_tailor_id != staff_id:
            continue
        if order.is_delivered:
            completed += 1
        else:
            active += 1
    return {
        "staff_id": staff_id,
        "active": active,
        "completed": completed,
        "completion_rate": percentage(completed, active + completed),
    }


def staff_overview(orders: Iterable[Order], staff: Iterable[User]) -> list[dict]:
    orders = list(orders)
    rows = []
    for member in staff:
        row = staff_performance(orders, member.id)
        row.update({
            "name": member.name,
            "role": member.role,
            "salary": member.salary,
            "last_salary_paid": member.last_salary_paid,
        })
        rows.append(row)
    return rows


# =============================================================================
# PAGE BUNDLES
# =============================================================================

def dashboard_summary(state) -> dict:
    """Headline numbers for the dashboard landing page."""
    totals = financial_summary(state.orders, state.expenses)
    return {
        "total_revenue": totals["total_revenue"],
        "total_expenses": totals["total_expenses"],
        "active_orders": len(active_orders(state.orders)),
        "total_customers": len(state.customers),
        "low_stock_count": len(low_stock_items(state.inventory)),
        "recent_orders": [o.to_dict() for o in state.orders[:RECENT_ORDER_COUNT]],
    }


def full_report(state) -> dict:
    """Owner-facing financial report bundle."""
    totals = financial_summary(state.orders, state.expenses)
    return {
        "revenue": totals["total_revenue"],
        "tax_liability": totals["tax_liability"],
        "total_expenses": totals["total_expenses"],
        "profit": totals["profit"],
        "monthly": monthly_series(state.orders, state.expenses),
        "expenses_by_category": expenses_by_category(state.expenses),
        "delivery_efficiency": delivery_efficiency(state.orders),
        "currency": state.settings.currency if state.settings else None,
    }
