from __future__ import annotations

from typing import Any, Iterable


# Maximum amount: ₹99,99,99,999 for a single price, advance, salary or expense.
# This keeps nonsensical values out of the persisted slices.
MAX_AMOUNT = 999_999_999


class ValidationError(ValueError):
    """400-level input problem."""


class ConflictError(ValueError):
    """409-level business rule conflict (e.g., duplicate phone)."""


class NotFoundError(ValueError):
    """404-level lookup miss for a record id."""


def require_text(data: dict[str, Any], key: str, label: str | None = None) -> str:
    """Return a stripped, non-empty string field or raise ValidationError."""
    value = data.get(key)
    if value is None or not str(value).strip():
        raise ValidationError(f"{label or key} is required")
    return str(value).strip()


def optional_text(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def to_number(value: Any, label: str, *, default: int | None = None) -> int | float:
    """
    Coerce a quantity or rate field to a non-negative number.

    - None / "" -> default (ValidationError if no default)
    - bools are rejected (True is not a quantity)
    - strings may carry thousands separators or a currency sign
    - fractions are kept (2.5 meters of fabric, a 12.5% tax rate)
    """
    if value is None or value == "":
        if default is None:
            raise ValidationError(f"{label} is required")
        return default

    if isinstance(value, bool):
        raise ValidationError(f"{label} must be a number")

    if isinstance(value, str):
        stripped = value.strip().replace(",", "").lstrip("₹$")
        try:
            value = float(stripped)
        except ValueError:
            raise ValidationError(f"{label} must be a number")

    if not isinstance(value, (int, float)):
        raise ValidationError(f"{label} must be a number")

    if value != value:  # NaN
        raise ValidationError(f"{label} must be a number")
    if value < 0:
        raise ValidationError(f"{label} cannot be negative")
    if value > MAX_AMOUNT:
        raise ValidationError(f"{label} exceeds maximum of {MAX_AMOUNT:,}")

    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def to_amount(value: Any, label: str, *, default: int | None = None) -> int:
    """
    Coerce a money field to a non-negative number of whole currency units.

    Same parsing as to_number, but fractional amounts ("10.25", 99.5) are
    rejected rather than rounded.
    """
    amount = to_number(value, label, default=default)
    if isinstance(amount, float):
        raise ValidationError(f"{label} must be a whole amount")
    return amount


def to_int(value: Any, label: str, *, default: int | None = None, minimum: int | None = None) -> int:
    """Strict integer coercion: rejects floats with fractions, bools and scientific notation."""
    if value is None or value == "":
        if default is None:
            raise ValidationError(f"{label} is required")
        return default

    if isinstance(value, bool):
        raise ValidationError(f"{label} must be an integer")

    if isinstance(value, int):
        result = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"{label} must be an integer, not a decimal")
        result = int(value)
    elif isinstance(value, str):
        stripped = value.strip()
        if "e" in stripped.lower() or "." in stripped:
            raise ValidationError(f"{label} must be a plain integer")
        try:
            result = int(stripped)
        except ValueError:
            raise ValidationError(f"{label} must be an integer")
    else:
        raise ValidationError(f"{label} must be an integer")

    if minimum is not None and result < minimum:
        raise ValidationError(f"{label} must be at least {minimum}")
    return result


def require_choice(value: Any, choices: Iterable[str], label: str) -> str:
    options = list(choices)
    if value not in options:
        raise ValidationError(f"Invalid {label}: {value}. Must be one of {options}")
    return value


# Errors a route reports back to the client rather than logging as failures
CLIENT_ERRORS = (ValidationError, ConflictError, NotFoundError)


def error_status(exc: Exception) -> int:
    """HTTP status for a client error."""
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ConflictError):
        return 409
    return 400
