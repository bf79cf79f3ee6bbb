# Overview: Service-layer operations for order payments; balances and settlement.

"""
Order Payment Service

WHY: An order is billed in full at creation and paid as an advance plus a
final settlement. Delivery implicitly settles whatever is outstanding.

RULES:
- paid_amount = advance_paid, plus the remaining balance once Delivered
- balance = total_amount - paid_amount
- settlement is full-only: advance_paid becomes total_amount
- settling an order with nothing outstanding is a no-op
"""

from __future__ import annotations

import dataclasses
from typing import Iterable

from flask import current_app

from ..models import Order
from ..validation import NotFoundError
from .store_service import SLICE_ORDERS


# =============================================================================
# PAYMENT STATUS (CONSTANTS)
# =============================================================================

PAYMENT_STATUS_UNPAID = "UNPAID"
PAYMENT_STATUS_PARTIAL = "PARTIAL"
PAYMENT_STATUS_PAID = "PAID"


# =============================================================================
# BALANCES
# =============================================================================

def paid_amount(order: Order):
    """Amount received for an order; delivery counts as full payment."""
    settled_on_delivery = order.total_amount - order.advance_paid if order.is_delivered else 0
    return order.advance_paid + settled_on_delivery


def balance(order: Order):
    """Outstanding amount. Negative only when the advance exceeds the total."""
    return order.total_amount - paid_amount(order)


def is_fully_paid(order: Order) -> bool:
    return order.advance_paid >= order.total_amount or order.is_delivered


def payment_status(order: Order) -> str:
    if is_fully_paid(order):
        return PAYMENT_STATUS_PAID
    if paid_amount(order) > 0:
        return PAYMENT_STATUS_PARTIAL
    return PAYMENT_STATUS_UNPAID


def payment_summary(orders: Iterable[Order]) -> dict:
    """Totals across orders plus one row per order for the payments ledger."""
    total = 0
    paid = 0
    rows = []
    for order in orders:
        order_paid = paid_amount(order)
        total += order.total_amount
        paid += order_paid
        rows.append({
            "order_id": order.id,
            "order_number": order.order_number,
            "customer_name": order.customer_name,
            "status": order.status,
            "total_amount": order.total_amount,
            "paid_amount": order_paid,
            "balance": order.total_amount - order_paid,
            "payment_status": payment_status(order),
        })
    return {
        "total_billed": total,
        "total_paid": paid,
        "outstanding": total - paid,
        "orders": rows,
    }


# =============================================================================
# SETTLEMENT
# =============================================================================

def settle(order: Order) -> Order:
    """
    Return the order with its advance raised to the full total.

    Orders with no outstanding balance are returned unchanged.
    """
    if balance(order) <= 0:
        return order
    return dataclasses.replace(order, advance_paid=order.total_amount)


def settle_order_payment(state, order_id: str) -> Order:
    """
    Settle an order's outstanding balance in full and persist the change.

    Raises:
        NotFoundError: If the order does not exist
    """
    order = state.find(SLICE_ORDERS, order_id)
    if order is None:
        raise NotFoundError(f"Order {order_id} not found")

    settled = settle(order)
    if settled is order:
        return order

    state.upsert(SLICE_ORDERS, settled)
    current_app.logger.info(
        "Settled order %s: collected %s", order.order_number, balance(order)
    )
    return settled
