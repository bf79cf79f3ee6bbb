from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any


ROLE_OWNER = "OWNER"
ROLE_TAILOR = "TAILOR"
VALID_ROLES = [ROLE_OWNER, ROLE_TAILOR]


@dataclass
class User:
    """
    A staff member who can sign in.

    Role gates navigation and order visibility: tailors only see the orders
    assigned to them.
    """
    id: str
    name: str
    role: str
    username: str
    salary: int | float | None = None
    last_salary_paid: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            role=data.get("role", ROLE_TAILOR),
            username=data["username"],
            salary=data.get("salary"),
            last_salary_paid=data.get("last_salary_paid"),
        )
