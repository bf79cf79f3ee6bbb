from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any


EXPENSE_CATEGORY_SALARY = "Salary"
EXPENSE_CATEGORY_RENT = "Rent"


@dataclass
class Expense:
    """An outgoing payment. Salary disbursements are recorded as category "Salary"."""
    id: str
    category: str
    amount: int | float
    date: str
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Expense":
        return cls(
            id=str(data["id"]),
            category=data["category"],
            amount=data["amount"],
            date=data["date"],
            description=data.get("description", ""),
        )


@dataclass
class ShopSettings:
    """Singleton shop profile. tax_rate is a percentage (5 means 5%)."""
    tax_rate: int | float
    shop_name: str
    address: str
    currency: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShopSettings":
        return cls(
            tax_rate=data.get("tax_rate", 0),
            shop_name=data.get("shop_name", ""),
            address=data.get("address", ""),
            currency=data.get("currency", ""),
        )
