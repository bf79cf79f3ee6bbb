# Overview: Persistent Store; loads and saves each state slice as an independently keyed JSON blob.

"""
Persistent Store

WHY: The whole application state is nine slices (eight record collections
plus the signed-in user), each persisted under its own key. Slices are read
individually at startup and written together as one snapshot whenever any
slice changes.

POLICIES:
- Missing slice: hydrated from a seed value (default services, inventory,
  staff and shop settings; everything else empty).
- Corrupt slice (bad JSON or records that cannot be built): falls back to the
  seed value and logs a warning. The stored row is left as-is until the next
  snapshot write replaces it.
- Write failure: retried on transient lock errors, then raised. There is no
  in-memory-only degraded mode.
"""

from __future__ import annotations

import copy
import json
from typing import Any

from flask import current_app

from ..extensions import db
from ..models import (
    StateSlice,
    User,
    Customer,
    Order,
    Measurement,
    Service,
    InventoryItem,
    Expense,
    ShopSettings,
    ROLE_OWNER,
    ROLE_TAILOR,
)
from .concurrency import run_with_retry


# =============================================================================
# SLICE NAMES (CONSTANTS)
# =============================================================================

SLICE_CURRENT_USER = "user"
SLICE_CUSTOMERS = "customers"
SLICE_ORDERS = "orders"
SLICE_MEASUREMENTS = "measurements"
SLICE_SERVICES = "services"
SLICE_INVENTORY = "inventory"
SLICE_EXPENSES = "expenses"
SLICE_STAFF = "staff"
SLICE_SETTINGS = "settings"

ALL_SLICES = [
    SLICE_CURRENT_USER,
    SLICE_CUSTOMERS,
    SLICE_ORDERS,
    SLICE_MEASUREMENTS,
    SLICE_SERVICES,
    SLICE_INVENTORY,
    SLICE_EXPENSES,
    SLICE_STAFF,
    SLICE_SETTINGS,
]

# Record type held by each collection slice
COLLECTION_TYPES = {
    SLICE_CUSTOMERS: Customer,
    SLICE_ORDERS: Order,
    SLICE_MEASUREMENTS: Measurement,
    SLICE_SERVICES: Service,
    SLICE_INVENTORY: InventoryItem,
    SLICE_EXPENSES: Expense,
    SLICE_STAFF: User,
}


# =============================================================================
# SEED VALUES
# =============================================================================

_SEEDS: dict[str, Any] = {
    SLICE_CURRENT_USER: None,
    SLICE_CUSTOMERS: [],
    SLICE_ORDERS: [],
    SLICE_MEASUREMENTS: [],
    SLICE_SERVICES: [
        Service(id="1", name="Standard Shirt Stitching", base_price=450, category="Shirt"),
        Service(id="2", name="Premium Pant Stitching", base_price=550, category="Pant"),
        Service(id="3", name="Suit Set (2pc)", base_price=2500, category="Suit"),
    ],
    SLICE_INVENTORY: [
        InventoryItem(id="1", name="White Cotton Thread", category="Thread", stock=50, unit="Rolls", low_stock_threshold=10),
        InventoryItem(id="2", name="Premium Suit Buttons", category="Accessory", stock=200, unit="Pcs", low_stock_threshold=50),
    ],
    SLICE_EXPENSES: [],
    SLICE_STAFF: [
        User(id="1", name="Admin Owner", role=ROLE_OWNER, username="admin"),
        User(id="2", name="John Tailor", role=ROLE_TAILOR, username="john", salary=15000),
    ],
    SLICE_SETTINGS: ShopSettings(
        tax_rate=5,
        shop_name="StitchFlow Pro",
        address="123 Fashion Street, New Delhi",
        currency="₹",
    ),
}


class StoreError(Exception):
    """Raised for unknown slice names."""
    pass


def _check_slice(name: str) -> None:
    if name not in ALL_SLICES:
        raise StoreError(f"Unknown state slice: {name}. Must be one of {ALL_SLICES}")


def slice_key(name: str) -> str:
    """Persisted key for a slice, e.g. "stitchflow_orders"."""
    _check_slice(name)
    return f"{current_app.config.get('STATE_KEY_PREFIX', 'stitchflow_')}{name}"


def seed_value(name: str) -> Any:
    """Fresh copy of the documented default for a slice."""
    _check_slice(name)
    return copy.deepcopy(_SEEDS[name])


# =============================================================================
# ENCODING
# =============================================================================

def encode(name: str, value: Any) -> Any:
    """Slice value -> JSON-ready structure."""
    _check_slice(name)
    if value is None:
        return None
    if name in COLLECTION_TYPES:
        return [record.to_dict() for record in value]
    return value.to_dict()


def decode(name: str, raw: Any) -> Any:
    """JSON structure -> slice value. Raises ValueError, KeyError, TypeError or AttributeError on bad shape."""
    _check_slice(name)
    if raw is None:
        return None if name == SLICE_CURRENT_USER else seed_value(name)
    if name in COLLECTION_TYPES:
        if not isinstance(raw, list):
            raise TypeError(f"Slice {name} must be a list")
        record_type = COLLECTION_TYPES[name]
        return [record_type.from_dict(item) for item in raw]
    if name == SLICE_CURRENT_USER:
        return User.from_dict(raw)
    return ShopSettings.from_dict(raw)


# =============================================================================
# LOAD / SAVE
# =============================================================================

def load(name: str) -> Any:
    """
    Load one slice, hydrating from the seed value when absent or corrupt.
    """
    key = slice_key(name)
    row = db.session.get(StateSlice, key)
    if row is None:
        return seed_value(name)

    try:
        return decode(name, json.loads(row.value))
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        current_app.logger.warning(
            "Corrupt state slice %s (%s); falling back to seed defaults", key, exc
        )
        return seed_value(name)


def load_all() -> dict[str, Any]:
    return {name: load(name) for name in ALL_SLICES}


def _write_row(key: str, raw: Any) -> None:
    row = db.session.get(StateSlice, key)
    if raw is None:
        if row is not None:
            db.session.delete(row)
        return
    text = json.dumps(raw, ensure_ascii=False)
    if row is None:
        db.session.add(StateSlice(key=key, value=text))
    else:
        row.value = text


def save(name: str, value: Any) -> None:
    """Persist a single slice."""
    save_all({name: value})


def save_all(values: dict[str, Any]) -> None:
    """
    Persist every given slice in one transaction.

    A None current user removes its row rather than storing null.
    """
    encoded = {slice_key(name): encode(name, value) for name, value in values.items()}

    def _op():
        for key, raw in encoded.items():
            _write_row(key, raw)
        db.session.commit()

    run_with_retry(_op)


def remove(name: str) -> None:
    """Delete a slice row; the next load returns its seed value."""
    key = slice_key(name)

    def _op():
        row = db.session.get(StateSlice, key)
        if row is not None:
            db.session.delete(row)
        db.session.commit()

    run_with_retry(_op)


def seed_all(*, overwrite: bool = False) -> list[str]:
    """
    Write seed values for every slice that has no row yet (or all, with overwrite).

    Returns the names of the slices written.
    """
    written = []
    values = {}
    for name in ALL_SLICES:
        if name == SLICE_CURRENT_USER:
            continue
        if overwrite or db.session.get(StateSlice, slice_key(name)) is None:
            values[name] = seed_value(name)
            written.append(name)
    if values:
        save_all(values)
    return written


def reset() -> int:
    """Delete every slice row. Returns the number of rows removed."""
    def _op() -> int:
        count = db.session.query(StateSlice).delete()
        db.session.commit()
        return count

    return run_with_retry(_op)


def export_snapshot() -> dict[str, Any]:
    """All slices (loaded with seed fallback) as one JSON-ready document."""
    return {slice_key(name): encode(name, value) for name, value in load_all().items()}


def list_slices() -> list[dict]:
    """Metadata for persisted slice rows, for CLI and health output."""
    rows = db.session.query(StateSlice).order_by(StateSlice.key.asc()).all()
    return [row.to_dict() for row in rows]
