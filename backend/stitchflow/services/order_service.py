# Overview: Service-layer operations for orders; creation, status changes and visibility.

"""
Order Service

WHY: Orders are the only records with real business rules. Creating one
checks that every garment has a measurement on file, snapshots prices
and names, and fixes the total (including tax) for the order's lifetime.

STATUS FLOW:
Pending -> In Progress -> Stitching -> Ready -> Delivered is the usual
path, but any status may be selected from any other (no transition
validation). Only values outside the status set are rejected.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Iterable

from flask import current_app

from ..models import (
    Order,
    OrderItem,
    User,
    ORDER_STATUSES,
    ORDER_STATUS_PENDING,
    ROLE_TAILOR,
)
from ..validation import (
    ValidationError,
    NotFoundError,
    require_choice,
    to_amount,
    to_int,
)
from stitchflow.money import round_half_up
from stitchflow.time_utils import utcnow, to_utc_z, parse_iso_datetime
from .identifier_service import new_id, next_order_number
from .measurement_service import has_matching_measurement
from .store_service import SLICE_ORDERS, SLICE_CUSTOMERS, SLICE_SERVICES, SLICE_STAFF


class OrderError(ValidationError):
    """Raised when an order request is incomplete or inconsistent."""
    pass


class MissingMeasurementError(OrderError):
    """Raised when a customer has no measurement matching a garment category."""

    def __init__(self, customer_id: str, category: str, service_name: str | None = None):
        label = f" for {service_name}" if service_name else ""
        super().__init__(
            f"Customer has no {category} measurement on file{label}. "
            f"Record a {category} measurement before creating this order."
        )
        self.customer_id = customer_id
        self.category = category
        self.service_name = service_name


# =============================================================================
# PRICING
# =============================================================================

def compute_tax(base_amount, tax_rate) -> int:
    """Tax on the item subtotal, rounded half up to whole currency units."""
    return round_half_up(base_amount * tax_rate / 100)


def items_subtotal(items: Iterable[OrderItem]):
    return sum(item.line_total for item in items)


# =============================================================================
# CREATION
# =============================================================================

def _requested_items(data: dict[str, Any]) -> list[dict[str, Any]]:
    items = data.get("items")
    if items is None and data.get("service_id"):
        # Single-garment form: one service, quantity 1
        items = [{"service_id": data.get("service_id"), "quantity": 1}]
    if not items:
        raise OrderError("Add at least one service to the order")
    if not isinstance(items, list):
        raise OrderError("items must be a list")
    return items


def _resolve_tailor(state, tailor_id) -> User | None:
    if not tailor_id:
        return None
    tailor = state.find(SLICE_STAFF, str(tailor_id))
    if tailor is None:
        raise OrderError(f"Tailor {tailor_id} not found")
    if tailor.role != ROLE_TAILOR:
        raise OrderError(f"{tailor.name} is not a tailor")
    return tailor


def create_order(state, data: dict[str, Any]) -> Order:
    """
    Create an order for a customer.

    Request fields:
        customer_id: required
        items: [{"service_id": ..., "quantity": 1}, ...] (or a single service_id)
        advance_paid: optional, defaults to 0 (not capped at the total)
        delivery_date: required, YYYY-MM-DD
        tailor_id: optional, must be a TAILOR

    Raises:
        OrderError: Missing/unknown customer, service or tailor, bad quantity
        MissingMeasurementError: A garment category has no measurement on file
    """
    customer_id = data.get("customer_id")
    if not customer_id:
        raise OrderError("Please select a customer")
    customer = state.find(SLICE_CUSTOMERS, str(customer_id))
    if customer is None:
        raise OrderError(f"Customer {customer_id} not found")

    items = []
    for raw in _requested_items(data):
        service_id = raw.get("service_id") if isinstance(raw, dict) else None
        if not service_id:
            raise OrderError("Every line item needs a service")
        service = state.find(SLICE_SERVICES, str(service_id))
        if service is None:
            raise OrderError(f"Service {service_id} not found")
        quantity = to_int(raw.get("quantity"), "quantity", default=1, minimum=1)

        if not has_matching_measurement(state.measurements, customer.id, service.category):
            raise MissingMeasurementError(customer.id, service.category, service.name)

        items.append(OrderItem(
            service_id=service.id,
            service_name=service.name,
            quantity=quantity,
            price=service.base_price,
        ))

    delivery_date = str(data.get("delivery_date") or "").strip()
    if not delivery_date:
        raise OrderError("delivery_date is required")
    try:
        parse_iso_datetime(delivery_date)
    except ValueError:
        raise OrderError("delivery_date must be an ISO date (YYYY-MM-DD)")

    advance_paid = to_amount(data.get("advance_paid"), "advance_paid", default=0)
    tailor = _resolve_tailor(state, data.get("tailor_id"))

    subtotal = items_subtotal(items)
    tax_rate = state.settings.tax_rate if state.settings else 0
    tax_amount = compute_tax(subtotal, tax_rate)

    order = Order(
        id=new_id(),
        order_number=next_order_number(o.order_number for o in state.orders),
        customer_id=customer.id,
        customer_name=customer.name,
        items=items,
        total_amount=subtotal + tax_amount,
        advance_paid=advance_paid,
        status=ORDER_STATUS_PENDING,
        delivery_date=delivery_date,
        assigned_tailor_id=tailor.id if tailor else None,
        assigned_tailor_name=tailor.name if tailor else None,
        created_at=to_utc_z(utcnow()),
        tax_amount=tax_amount,
    )
    state.upsert(SLICE_ORDERS, order)

    if advance_paid > order.total_amount:
        current_app.logger.warning(
            "Order %s advance %s exceeds total %s", order.order_number, advance_paid, order.total_amount
        )
    current_app.logger.info(
        "Created order %s for customer %s: total %s (tax %s)",
        order.order_number, customer.id, order.total_amount, tax_amount,
    )
    return order


# =============================================================================
# UPDATES / QUERIES
# =============================================================================

def get_order(state, order_id: str) -> Order:
    order = state.find(SLICE_ORDERS, order_id)
    if order is None:
        raise NotFoundError(f"Order {order_id} not found")
    return order


def update_status(state, order_id: str, status: str) -> Order:
    """Set an order's status to any value in the status set."""
    require_choice(status, ORDER_STATUSES, "order status")
    order = get_order(state, order_id)
    if order.status == status:
        return order
    updated = dataclasses.replace(order, status=status)
    state.upsert(SLICE_ORDERS, updated)
    current_app.logger.info("Order %s status %s -> %s", order.order_number, order.status, status)
    return updated


def visible_orders(orders: Iterable[Order], user: User | None, status: str | None = None) -> list[Order]:
    """
    Orders a user may see, optionally filtered by status.

    Tailors see only orders assigned to them; owners see everything.
    """
    if status:
        require_choice(status, ORDER_STATUSES, "order status")
    result = []
    for order in orders:
        if status and order.status != status:
            continue
        if user is not None and user.role == ROLE_TAILOR and order.assigned_tailor_id != user.id:
            continue
        result.append(order)
    return result
