# Overview: Service-layer operations for customers; profiles, search and order history.

from __future__ import annotations

import dataclasses
from typing import Any, Iterable

from flask import current_app

from ..models import Customer
from ..validation import ConflictError, NotFoundError, optional_text, require_text
from stitchflow.time_utils import today_iso
from .identifier_service import new_id
from .store_service import SLICE_CUSTOMERS
from . import reporting_service


class DuplicatePhoneError(ConflictError):
    """Raised when a new customer reuses an existing customer's phone number."""

    def __init__(self, phone: str):
        super().__init__("Customer with this phone number already exists")
        self.phone = phone


def phone_in_use(customers: Iterable[Customer], phone: str) -> bool:
    """
    Exact phone match after trimming surrounding whitespace.

    Formatting is not normalized: "98765 43210" and "9876543210" are
    different numbers here.
    """
    phone = phone.strip()
    return any(c.phone.strip() == phone for c in customers)


def add_customer(state, data: dict[str, Any]) -> Customer:
    """
    Create a customer profile.

    Raises:
        ValidationError: If name or phone is missing
        DuplicatePhoneError: If the phone number is already on file
    """
    name = require_text(data, "name", "Name")
    phone = require_text(data, "phone", "Phone")

    if phone_in_use(state.customers, phone):
        raise DuplicatePhoneError(phone)

    customer = Customer(
        id=new_id(),
        name=name,
        phone=phone,
        email=optional_text(data, "email"),
        address=optional_text(data, "address"),
        created_at=today_iso(),
    )
    state.upsert(SLICE_CUSTOMERS, customer)
    current_app.logger.info("Added customer %s (%s)", customer.id, customer.name)
    return customer


def update_customer(state, customer_id: str, data: dict[str, Any]) -> Customer:
    """
    Edit a customer profile. Duplicate phones are only checked at creation.
    """
    customer = state.find(SLICE_CUSTOMERS, customer_id)
    if customer is None:
        raise NotFoundError(f"Customer {customer_id} not found")

    changes = {}
    if "name" in data:
        changes["name"] = require_text(data, "name", "Name")
    if "phone" in data:
        changes["phone"] = require_text(data, "phone", "Phone")
    if "email" in data:
        changes["email"] = optional_text(data, "email")
    if "address" in data:
        changes["address"] = optional_text(data, "address")

    updated = dataclasses.replace(customer, **changes)
    state.upsert(SLICE_CUSTOMERS, updated)
    return updated


def delete_customer(state, customer_id: str) -> None:
    """
    Remove a customer. Their orders and measurements are left in place and
    show the denormalized name or a placeholder from then on.
    """
    if not state.remove_record(SLICE_CUSTOMERS, customer_id):
        raise NotFoundError(f"Customer {customer_id} not found")
    current_app.logger.info("Deleted customer %s (orders and measurements kept)", customer_id)


def search_customers(customers: Iterable[Customer], term: str | None) -> list[Customer]:
    """Case-insensitive name/email match, or a raw substring of the phone."""
    term = (term or "").strip().lower()
    customers = list(customers)
    if not term:
        return customers
    return [
        c for c in customers
        if term in (c.name or "").lower()
        or term in (c.phone or "")
        or term in (c.email or "").lower()
    ]


def customer_history(state, customer_id: str) -> dict:
    """A customer's profile, orders and yearly spend rollup."""
    customer = state.find(SLICE_CUSTOMERS, customer_id)
    if customer is None:
        raise NotFoundError(f"Customer {customer_id} not found")

    orders = [o for o in state.orders if o.customer_id == customer_id]
    return {
        "customer": customer.to_dict(),
        "order_count": len(orders),
        "orders": [o.to_dict() for o in orders],
        "yearly": reporting_service.yearly_order_summary(orders),
    }
