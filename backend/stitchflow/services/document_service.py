# Overview: Printable documents; the per-order job card handed to the workshop.

"""
Job Card

A read-only rendering of one order for the cutting/stitching table: shop
header, order and customer details, and for each garment the measurement
sheets matched by the same category/type rule used at order creation.

Missing references (deleted customer or tailor) render as a placeholder
instead of failing.
"""

from __future__ import annotations

from stitchflow.money import format_money
from .measurement_service import matching_measurements
from .order_service import get_order
from .payment_service import balance
from .store_service import SLICE_CUSTOMERS, SLICE_SERVICES, SLICE_STAFF

PLACEHOLDER = "Unknown"
NO_MEASUREMENT = "No measurement on file"


def build_job_card(state, order_id: str) -> dict:
    """Structured job card for an order."""
    order = get_order(state, order_id)
    settings = state.settings
    currency = settings.currency if settings else ""

    customer = state.find(SLICE_CUSTOMERS, order.customer_id)
    tailor = state.find(SLICE_STAFF, order.assigned_tailor_id) if order.assigned_tailor_id else None

    garments = []
    for item in order.items:
        service = state.find(SLICE_SERVICES, item.service_id)
        category = service.category if service else None
        sheets = matching_measurements(state.measurements, order.customer_id, category) if category else []
        garments.append({
            "service_name": item.service_name,
            "category": category or PLACEHOLDER,
            "quantity": item.quantity,
            "measurements": [
                {
                    "type": sheet.type,
                    "updated_at": sheet.updated_at,
                    "details": dict(sheet.details),
                    "remarks": sheet.remarks,
                }
                for sheet in sheets
            ],
        })

    return {
        "shop_name": settings.shop_name if settings else "",
        "shop_address": settings.address if settings else "",
        "order_number": order.order_number,
        "status": order.status,
        "created_at": order.created_at,
        "delivery_date": order.delivery_date,
        "customer_name": customer.name if customer else (order.customer_name or PLACEHOLDER),
        "customer_phone": customer.phone if customer else PLACEHOLDER,
        "tailor_name": tailor.name if tailor else (order.assigned_tailor_name or PLACEHOLDER),
        "balance_due": format_money(balance(order), currency),
        "garments": garments,
    }


def render_job_card_text(card: dict) -> str:
    """Plain-text rendering of a job card, suitable for printing."""
    rule = "=" * 48
    lines = [
        rule,
        card["shop_name"],
        card["shop_address"],
        rule,
        f"JOB CARD  {card['order_number']}",
        f"Customer: {card['customer_name']} ({card['customer_phone']})",
        f"Tailor:   {card['tailor_name']}",
        f"Delivery: {card['delivery_date']}",
        f"Status:   {card['status']}",
        f"Balance:  {card['balance_due']}",
        "-" * 48,
    ]
    for garment in card["garments"]:
        lines.append(f"{garment['service_name']} x{garment['quantity']}  [{garment['category']}]")
        if not garment["measurements"]:
            lines.append(f"  {NO_MEASUREMENT}")
        for sheet in garment["measurements"]:
            lines.append(f"  {sheet['type']} (updated {sheet['updated_at']})")
            for label, value in sheet["details"].items():
                lines.append(f"    {label:<16} {value}")
            if sheet["remarks"]:
                lines.append(f"    Remarks: {sheet['remarks']}")
        lines.append("")
    lines.append(rule)
    return "\n".join(lines)


def render_job_card(state, order_id: str) -> dict:
    card = build_job_card(state, order_id)
    return {"card": card, "text": render_job_card_text(card)}
