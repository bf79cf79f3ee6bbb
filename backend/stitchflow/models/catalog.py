from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any


INVENTORY_FABRIC = "Fabric"
INVENTORY_ACCESSORY = "Accessory"
INVENTORY_THREAD = "Thread"
INVENTORY_OTHER = "Other"
INVENTORY_CATEGORIES = [INVENTORY_FABRIC, INVENTORY_ACCESSORY, INVENTORY_THREAD, INVENTORY_OTHER]


@dataclass
class Service:
    """
    Catalog entry. `category` is matched case-insensitively against
    Measurement.type to decide whether a customer has been measured for it.
    """
    id: str
    name: str
    base_price: int | float
    category: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Service":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            base_price=data["base_price"],
            category=data.get("category", ""),
        )


@dataclass
class InventoryItem:
    id: str
    name: str
    category: str
    stock: int | float
    unit: str
    low_stock_threshold: int | float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InventoryItem":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            category=data.get("category", INVENTORY_OTHER),
            stock=data.get("stock", 0),
            unit=data.get("unit", ""),
            low_stock_threshold=data.get("low_stock_threshold", 0),
        )
