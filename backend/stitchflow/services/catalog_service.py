# Overview: Service-layer operations for the stitching service catalog.

from __future__ import annotations

import dataclasses
from typing import Any

from ..models import Service
from ..validation import NotFoundError, optional_text, require_text, to_amount
from .identifier_service import new_id
from .store_service import SLICE_SERVICES


def add_service(state, data: dict[str, Any]) -> Service:
    service = Service(
        id=new_id(),
        name=require_text(data, "name", "Name"),
        base_price=to_amount(data.get("base_price"), "base_price", default=0),
        category=optional_text(data, "category") or "Shirt",
    )
    state.upsert(SLICE_SERVICES, service)
    return service


def update_service(state, service_id: str, data: dict[str, Any]) -> Service:
    """
    Edit a catalog entry. Existing orders keep the name and price they
    were created with.
    """
    service = state.find(SLICE_SERVICES, service_id)
    if service is None:
        raise NotFoundError(f"Service {service_id} not found")

    changes = {}
    if "name" in data:
        changes["name"] = require_text(data, "name", "Name")
    if "base_price" in data:
        changes["base_price"] = to_amount(data.get("base_price"), "base_price")
    if "category" in data:
        changes["category"] = require_text(data, "category", "Category")

    updated = dataclasses.replace(service, **changes)
    state.upsert(SLICE_SERVICES, updated)
    return updated


def delete_service(state, service_id: str) -> None:
    if not state.remove_record(SLICE_SERVICES, service_id):
        raise NotFoundError(f"Service {service_id} not found")
