from .state import StateSlice
from .staff import User, ROLE_OWNER, ROLE_TAILOR, VALID_ROLES
from .customers import Customer, Measurement, MEASUREMENT_TYPES, MEASUREMENT_TEMPLATES
from .orders import Order, OrderItem, ORDER_STATUSES, ORDER_STATUS_DELIVERED, ORDER_STATUS_PENDING
from .catalog import Service, InventoryItem, INVENTORY_CATEGORIES
from .finance import Expense, ShopSettings, EXPENSE_CATEGORY_SALARY, EXPENSE_CATEGORY_RENT

__all__ = [
    'StateSlice',
    'User', 'ROLE_OWNER', 'ROLE_TAILOR', 'VALID_ROLES',
    'Customer', 'Measurement', 'MEASUREMENT_TYPES', 'MEASUREMENT_TEMPLATES',
    'Order', 'OrderItem', 'ORDER_STATUSES', 'ORDER_STATUS_DELIVERED', 'ORDER_STATUS_PENDING',
    'Service', 'InventoryItem', 'INVENTORY_CATEGORIES',
    'Expense', 'ShopSettings', 'EXPENSE_CATEGORY_SALARY', 'EXPENSE_CATEGORY_RENT',
]
