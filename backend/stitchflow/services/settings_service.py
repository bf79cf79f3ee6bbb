# Overview: Service-layer operations for the singleton shop settings record.

from __future__ import annotations

import dataclasses
from typing import Any

from flask import current_app

from ..models import ShopSettings
from ..validation import ValidationError, require_text, to_number
from . import store_service
from .store_service import SLICE_SETTINGS

# Percent; anything higher is almost certainly a typo for a fraction
MAX_TAX_RATE = 100


def get_settings(state) -> ShopSettings:
    return state.settings or store_service.seed_value(SLICE_SETTINGS)


def update_settings(state, data: dict[str, Any]) -> ShopSettings:
    """
    Update shop profile fields. A new tax rate applies to orders created
    afterwards only; existing order totals are never recalculated.
    """
    current = get_settings(state)
    changes = {}
    if "tax_rate" in data:
        rate = to_number(data.get("tax_rate"), "tax_rate")
        if rate > MAX_TAX_RATE:
            raise ValidationError(f"tax_rate must be between 0 and {MAX_TAX_RATE}")
        changes["tax_rate"] = rate
    for key in ("shop_name", "address", "currency"):
        if key in data:
            changes[key] = require_text(data, key)

    updated = dataclasses.replace(current, **changes)
    state.update_settings(updated)
    if "tax_rate" in changes and changes["tax_rate"] != current.tax_rate:
        current_app.logger.info("Tax rate changed %s%% -> %s%%", current.tax_rate, changes["tax_rate"])
    return updated
