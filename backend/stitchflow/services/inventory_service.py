# Overview: Service-layer operations for workshop inventory (fabric, thread, accessories).

from __future__ import annotations

import dataclasses
from typing import Any, Iterable

from flask import current_app

from ..models import InventoryItem, INVENTORY_CATEGORIES
from ..validation import NotFoundError, optional_text, require_text, require_choice, to_number
from .identifier_service import new_id
from .reporting_service import is_low_stock
from .store_service import SLICE_INVENTORY


def add_item(state, data: dict[str, Any]) -> InventoryItem:
    item = InventoryItem(
        id=new_id(),
        name=require_text(data, "name", "Name"),
        category=require_choice(data.get("category", "Fabric"), INVENTORY_CATEGORIES, "inventory category"),
        stock=to_number(data.get("stock"), "stock", default=0),
        unit=optional_text(data, "unit") or "Meters",
        low_stock_threshold=to_number(data.get("low_stock_threshold"), "low_stock_threshold", default=5),
    )
    state.upsert(SLICE_INVENTORY, item)
    return item


def update_item(state, item_id: str, data: dict[str, Any]) -> InventoryItem:
    item = state.find(SLICE_INVENTORY, item_id)
    if item is None:
        raise NotFoundError(f"Inventory item {item_id} not found")

    changes = {}
    if "name" in data:
        changes["name"] = require_text(data, "name", "Name")
    if "category" in data:
        changes["category"] = require_choice(data.get("category"), INVENTORY_CATEGORIES, "inventory category")
    if "stock" in data:
        changes["stock"] = to_number(data.get("stock"), "stock")
    if "unit" in data:
        changes["unit"] = require_text(data, "unit", "Unit")
    if "low_stock_threshold" in data:
        changes["low_stock_threshold"] = to_number(data.get("low_stock_threshold"), "low_stock_threshold")

    updated = dataclasses.replace(item, **changes)
    state.upsert(SLICE_INVENTORY, updated)
    if is_low_stock(updated) and not is_low_stock(item):
        current_app.logger.warning(
            "Inventory item %s is low: %s %s left", updated.name, updated.stock, updated.unit
        )
    return updated


def delete_item(state, item_id: str) -> None:
    if not state.remove_record(SLICE_INVENTORY, item_id):
        raise NotFoundError(f"Inventory item {item_id} not found")


def search_items(items: Iterable[InventoryItem], term: str | None) -> list[InventoryItem]:
    term = (term or "").strip().lower()
    items = list(items)
    if not term:
        return items
    return [i for i in items if term in i.name.lower() or term in i.category.lower()]
