# Overview: Role-gated navigation; which areas each staff role may reach.
# Each area is defined as: (name, path, roles)

from .models import ROLE_OWNER, ROLE_TAILOR

BOTH_ROLES = (ROLE_OWNER, ROLE_TAILOR)
OWNER_ONLY = (ROLE_OWNER,)

NAVIGATION_ITEMS = [
    ("Dashboard", "/", BOTH_ROLES),
    ("Customers", "/customers", BOTH_ROLES),
    ("Measurements", "/measurements", BOTH_ROLES),
    ("Orders", "/orders", BOTH_ROLES),
    ("Inventory", "/inventory", OWNER_ONLY),
    ("Expenses", "/expenses", OWNER_ONLY),
    ("Services", "/services", OWNER_ONLY),
    ("Payments", "/payments", OWNER_ONLY),
    ("Staff", "/staff", OWNER_ONLY),
    ("Settings", "/settings", OWNER_ONLY),
    ("Reports", "/reports", OWNER_ONLY),
]


def navigation_for(role: str) -> list[dict]:
    """Navigation entries visible to a role, in menu order."""
    return [
        {"name": name, "path": path}
        for name, path, roles in NAVIGATION_ITEMS
        if role in roles
    ]


def can_access(role: str, path: str) -> bool:
    for _, item_path, roles in NAVIGATION_ITEMS:
        if item_path == path:
            return role in roles
    return False
