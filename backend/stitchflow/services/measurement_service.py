# Overview: Service-layer operations for measurements; recording sheets and category matching.

from __future__ import annotations

import dataclasses
from typing import Any, Iterable

from flask import current_app

from ..models import Measurement, Customer, MEASUREMENT_TYPES, MEASUREMENT_TEMPLATES
from ..validation import ValidationError, NotFoundError, optional_text, require_text, require_choice
from stitchflow.time_utils import today_iso
from .identifier_service import new_id
from .store_service import SLICE_MEASUREMENTS, SLICE_CUSTOMERS
from . import advisory_service


# A styling request needs at least this many recorded dimensions
MIN_DETAILS_FOR_ADVICE = 2


def category_matches(service_category: str | None, measurement_type: str | None) -> bool:
    """
    Case-insensitive match between a service category and a measurement type.

    This is a loose string comparison by intent: a "shirt" service matches a
    "Shirt" sheet, but a "Suit" service matches nothing unless a measurement
    of that exact type name exists.
    """
    if not service_category or not measurement_type:
        return False
    return service_category.strip().lower() == measurement_type.strip().lower()


def matching_measurements(
    measurements: Iterable[Measurement],
    customer_id: str,
    category: str,
) -> list[Measurement]:
    """Measurements on file for a customer whose type matches a service category."""
    return [
        m for m in measurements
        if m.customer_id == customer_id and category_matches(category, m.type)
    ]


def has_matching_measurement(measurements: Iterable[Measurement], customer_id: str, category: str) -> bool:
    return bool(matching_measurements(measurements, customer_id, category))


def _clean_details(raw: Any) -> dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValidationError("details must be an object of label -> value")
    details = {}
    for label, value in raw.items():
        label = str(label).strip()
        if not label or value is None or str(value).strip() == "":
            continue
        details[label] = value
    return details


def add_measurement(state, data: dict[str, Any]) -> Measurement:
    """
    Record a new measurement sheet for a customer.

    Raises:
        ValidationError: If no customer is selected or the type is unknown
        NotFoundError: If the customer does not exist
    """
    customer_id = require_text(data, "customer_id", "Customer")
    if state.find(SLICE_CUSTOMERS, customer_id) is None:
        raise NotFoundError(f"Customer {customer_id} not found")

    measurement = Measurement(
        id=new_id(),
        customer_id=customer_id,
        type=require_choice(data.get("type", "Shirt"), MEASUREMENT_TYPES, "measurement type"),
        details=_clean_details(data.get("details")),
        remarks=optional_text(data, "remarks"),
        updated_at=today_iso(),
    )
    state.upsert(SLICE_MEASUREMENTS, measurement)
    current_app.logger.info(
        "Recorded %s measurement %s for customer %s", measurement.type, measurement.id, customer_id
    )
    return measurement


def delete_measurement(state, measurement_id: str) -> None:
    if not state.remove_record(SLICE_MEASUREMENTS, measurement_id):
        raise NotFoundError(f"Measurement {measurement_id} not found")


def search_measurements(
    measurements: Iterable[Measurement],
    customers: Iterable[Customer],
    term: str | None,
) -> list[Measurement]:
    """
    Filter measurements by the owning customer's name or phone.

    Sheets whose customer no longer exists only show up for an empty search.
    """
    term = (term or "").strip().lower()
    measurements = list(measurements)
    if not term:
        return measurements
    by_id = {c.id: c for c in customers}
    results = []
    for m in measurements:
        customer = by_id.get(m.customer_id)
        name = (customer.name if customer else "").lower()
        phone = customer.phone if customer else ""
        if term in name or term in phone:
            results.append(m)
    return results


def field_templates() -> dict[str, list[str]]:
    return {name: list(fields) for name, fields in MEASUREMENT_TEMPLATES.items()}


def styling_prompt(measurement_type: str, details: dict[str, Any]) -> str:
    lines = [f"Client Measurements for a {measurement_type}:"]
    lines.extend(f"- {label}: {value} inches" for label, value in details.items())
    lines.append("")
    lines.append(
        "Provide professional tailoring styling advice and design remarks (max 30 words). "
        "Suggest fit, collar/cuff style, or pocket styles suitable for these proportions."
    )
    return "\n".join(lines)


def suggest_styling(measurement_type: str, details: dict[str, Any]) -> str:
    """
    Ask the advisory collaborator for styling tips for a set of dimensions.

    Never fails on collaborator errors (a fallback tip is returned), but
    rejects requests with too few dimensions to be useful.
    """
    details = _clean_details(details)
    if len(details) < MIN_DETAILS_FOR_ADVICE:
        raise ValidationError("Please enter some measurements first for better suggestions")
    return advisory_service.generate_advice(
        styling_prompt(measurement_type, details),
        system_instruction=advisory_service.STYLIST_INSTRUCTION,
        fallback=advisory_service.STYLING_FALLBACK,
    )


def append_tip(remarks: str | None, advice: str) -> str:
    tip = f"AI Tip: {advice}"
    return f"{remarks}\n\n{tip}" if remarks else tip


def apply_styling_tips(state, measurement_id: str) -> Measurement:
    """Generate styling advice for a stored sheet and append it to its remarks."""
    measurement = state.find(SLICE_MEASUREMENTS, measurement_id)
    if measurement is None:
        raise NotFoundError(f"Measurement {measurement_id} not found")

    advice = suggest_styling(measurement.type, measurement.details)
    updated = dataclasses.replace(
        measurement,
        remarks=append_tip(measurement.remarks, advice),
        updated_at=today_iso(),
    )
    state.upsert(SLICE_MEASUREMENTS, updated)
    return updated
