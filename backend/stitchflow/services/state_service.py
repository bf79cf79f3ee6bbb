# Overview: Session State; the in-memory nine-slice snapshot and its mutation methods.

"""
Session State

WHY: Every view works against the same nine slices. Instead of ambient
globals, an explicit AppState object is hydrated from the Persistent Store
once per request (kept on flask.g) and passed to the services that need it.

MUTATION CONTRACT:
- replace(): whole-collection replacement, the coarse primitive
- upsert() / remove_record(): id-keyed edits built on top of replace()
- every mutation persists the full snapshot of all nine slices; the last
  writer of a snapshot wins, and concurrent writers are neither detected
  nor reconciled
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from flask import g, current_app

from ..models import (
    User,
    Customer,
    Order,
    Measurement,
    Service,
    InventoryItem,
    Expense,
    ShopSettings,
)
from . import store_service
from .store_service import (
    ALL_SLICES,
    COLLECTION_TYPES,
    SLICE_CURRENT_USER,
    SLICE_ORDERS,
    SLICE_MEASUREMENTS,
    SLICE_EXPENSES,
    SLICE_SETTINGS,
)


# New records go to the front of these collections (newest first), to the
# back of all others.
NEWEST_FIRST_SLICES = {SLICE_ORDERS, SLICE_MEASUREMENTS, SLICE_EXPENSES}


class StateError(ValueError):
    """Raised when a slice is addressed with the wrong kind of value."""
    pass


@dataclass
class AppState:
    current_user: User | None = None
    customers: list[Customer] = field(default_factory=list)
    orders: list[Order] = field(default_factory=list)
    measurements: list[Measurement] = field(default_factory=list)
    services: list[Service] = field(default_factory=list)
    inventory: list[InventoryItem] = field(default_factory=list)
    expenses: list[Expense] = field(default_factory=list)
    staff: list[User] = field(default_factory=list)
    settings: ShopSettings | None = None

    # -------------------------------------------------------------------------
    # Hydration / persistence
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls) -> "AppState":
        values = store_service.load_all()
        return cls(
            current_user=values[SLICE_CURRENT_USER],
            customers=values["customers"],
            orders=values["orders"],
            measurements=values["measurements"],
            services=values["services"],
            inventory=values["inventory"],
            expenses=values["expenses"],
            staff=values["staff"],
            settings=values[SLICE_SETTINGS],
        )

    def get_slice(self, name: str) -> Any:
        if name not in ALL_SLICES:
            raise StateError(f"Unknown state slice: {name}")
        if name == SLICE_CURRENT_USER:
            return self.current_user
        return getattr(self, name)

    def snapshot(self) -> dict[str, Any]:
        """All nine slices keyed by slice name (live references, not copies)."""
        return {name: self.get_slice(name) for name in ALL_SLICES}

    def persist(self) -> None:
        store_service.save_all(self.snapshot())

    # -------------------------------------------------------------------------
    # Collection mutations
    # -------------------------------------------------------------------------

    def _collection(self, name: str) -> list:
        if name not in COLLECTION_TYPES:
            raise StateError(f"{name} is not a record collection")
        return getattr(self, name)

    def replace(self, name: str, records: list) -> None:
        """Replace a whole collection and persist the snapshot."""
        self.replace_many({name: records})

    def replace_many(self, collections: dict[str, list]) -> None:
        """Replace several collections, persisting one snapshot for all of them."""
        for name, records in collections.items():
            self._collection(name)
            record_type = COLLECTION_TYPES[name]
            for record in records:
                if not isinstance(record, record_type):
                    raise StateError(f"{name} holds {record_type.__name__} records")
        for name, records in collections.items():
            setattr(self, name, list(records))
        self.persist()

    def find(self, name: str, record_id: str):
        for record in self._collection(name):
            if record.id == record_id:
                return record
        return None

    def with_record(self, name: str, record) -> list:
        """
        The collection with a record inserted, or swapped in place by id.

        Returns a new list; the state itself is not touched.
        """
        records = self._collection(name)
        replaced = False
        updated = []
        for existing in records:
            if existing.id == record.id:
                updated.append(record)
                replaced = True
            else:
                updated.append(existing)
        if not replaced:
            if name in NEWEST_FIRST_SLICES:
                updated.insert(0, record)
            else:
                updated.append(record)
        return updated

    def upsert(self, name: str, record) -> None:
        """Insert a record, or replace the record with the same id in place."""
        self.replace(name, self.with_record(name, record))

    def remove_record(self, name: str, record_id: str) -> bool:
        """Filter a record out by id. Returns False when nothing matched."""
        records = self._collection(name)
        remaining = [r for r in records if r.id != record_id]
        if len(remaining) == len(records):
            return False
        self.replace(name, remaining)
        return True

    # -------------------------------------------------------------------------
    # Singleton slices
    # -------------------------------------------------------------------------

    def update_settings(self, settings: ShopSettings) -> None:
        self.settings = settings
        self.persist()

    def set_current_user(self, user: User | None) -> None:
        self.current_user = user
        self.persist()

    def logout(self) -> None:
        """Clear the signed-in user and remove its persisted key."""
        self.current_user = None
        store_service.remove(SLICE_CURRENT_USER)


def get_state() -> AppState:
    """Request-scoped AppState, hydrated on first use."""
    if "app_state" not in g:
        g.app_state = AppState.load()
        current_app.logger.debug("Hydrated application state")
    return g.app_state
