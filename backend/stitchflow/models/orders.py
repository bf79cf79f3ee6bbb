from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any


# =============================================================================
# ORDER STATUS (CONSTANTS)
# =============================================================================

ORDER_STATUS_PENDING = "Pending"
ORDER_STATUS_IN_PROGRESS = "In Progress"
ORDER_STATUS_STITCHING = "Stitching"
ORDER_STATUS_READY = "Ready"
ORDER_STATUS_DELIVERED = "Delivered"

# Workflow order; any status may be selected from any other.
ORDER_STATUSES = [
    ORDER_STATUS_PENDING,
    ORDER_STATUS_IN_PROGRESS,
    ORDER_STATUS_STITCHING,
    ORDER_STATUS_READY,
    ORDER_STATUS_DELIVERED,
]


@dataclass
class OrderItem:
    service_id: str
    service_name: str
    quantity: int
    price: int | float

    @property
    def line_total(self):
        return self.price * self.quantity

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OrderItem":
        return cls(
            service_id=str(data["service_id"]),
            service_name=data["service_name"],
            quantity=int(data.get("quantity", 1)),
            price=data["price"],
        )


@dataclass
class Order:
    """
    A customer order.

    total_amount = sum(item.price * item.quantity) + tax_amount, fixed at
    creation; later tax-rate changes never touch existing orders.
    customer_name and assigned_tailor_name are denormalized snapshots.
    """
    id: str
    order_number: str
    customer_id: str
    customer_name: str
    total_amount: int | float
    advance_paid: int | float
    status: str
    delivery_date: str
    created_at: str
    items: list[OrderItem] = field(default_factory=list)
    tax_amount: int | float = 0
    assigned_tailor_id: str | None = None
    assigned_tailor_name: str | None = None

    @property
    def is_delivered(self) -> bool:
        return self.status == ORDER_STATUS_DELIVERED

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Order":
        return cls(
            id=str(data["id"]),
            order_number=data["order_number"],
            customer_id=str(data["customer_id"]),
            customer_name=data.get("customer_name", ""),
            total_amount=data["total_amount"],
            advance_paid=data.get("advance_paid", 0),
            status=data.get("status", ORDER_STATUS_PENDING),
            delivery_date=data.get("delivery_date", ""),
            created_at=data["created_at"],
            items=[OrderItem.from_dict(i) for i in data.get("items") or []],
            tax_amount=data.get("tax_amount", 0),
            assigned_tailor_id=data.get("assigned_tailor_id"),
            assigned_tailor_name=data.get("assigned_tailor_name"),
        )
