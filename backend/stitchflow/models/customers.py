from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any


MEASUREMENT_SHIRT = "Shirt"
MEASUREMENT_PANT = "Pant"
MEASUREMENT_CUSTOM = "Custom"
MEASUREMENT_TYPES = [MEASUREMENT_SHIRT, MEASUREMENT_PANT, MEASUREMENT_CUSTOM]

# Field templates offered when recording a new measurement sheet
SHIRT_FIELDS = ["Collar", "Chest", "Waist", "Sleeve Length", "Shoulder", "Full Length"]
PANT_FIELDS = ["Waist", "Hip", "Thigh", "Length", "Bottom", "Inseam"]
MEASUREMENT_TEMPLATES = {
    MEASUREMENT_SHIRT: SHIRT_FIELDS,
    MEASUREMENT_PANT: PANT_FIELDS,
    MEASUREMENT_CUSTOM: [],
}


@dataclass
class Customer:
    """
    Customer profile. Phone is a soft-unique business key: duplicates are
    rejected at creation only, never on edit.
    """
    id: str
    name: str
    phone: str
    created_at: str
    email: str | None = None
    address: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Customer":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            phone=data["phone"],
            created_at=data["created_at"],
            email=data.get("email"),
            address=data.get("address"),
        )


@dataclass
class Measurement:
    """
    A garment measurement sheet for one customer.

    `details` maps a label (e.g. "Chest") to the recorded value in inches.
    The customer reference is not cascaded on delete.
    """
    id: str
    customer_id: str
    type: str
    updated_at: str
    details: dict[str, str | int | float] = field(default_factory=dict)
    remarks: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Measurement":
        return cls(
            id=str(data["id"]),
            customer_id=str(data["customer_id"]),
            type=data["type"],
            updated_at=data["updated_at"],
            details=dict(data.get("details") or {}),
            remarks=data.get("remarks"),
        )
