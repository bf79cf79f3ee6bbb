# Overview: Flask API routes for orders; parses input and returns JSON responses.

# backend/stitchflow/routes/orders.py
"""
Order API Routes

ACCESS:
- Owners see and create all orders
- Tailors see only orders assigned to them, and may move them through
  the status flow
"""

from flask import Blueprint, request, jsonify, g, current_app

from ..decorators import require_auth, require_area, require_role
from ..models import ROLE_OWNER, ROLE_TAILOR
from ..services import order_service
from ..services.order_service import MissingMeasurementError
from ..services.payment_service import paid_amount, balance
from ..services.state_service import get_state
from ..validation import CLIENT_ERRORS, NotFoundError, error_status


orders_bp = Blueprint("orders", __name__, url_prefix="/api/orders")


def _order_payload(order) -> dict:
    payload = order.to_dict()
    payload["paid_amount"] = paid_amount(order)
    payload["balance"] = balance(order)
    return payload


def _get_visible_order(order_id: str):
    state = get_state()
    order = order_service.get_order(state, order_id)
    if not order_service.visible_orders([order], g.current_user):
        raise NotFoundError(f"Order {order_id} not found")
    return order


@orders_bp.get("")
@require_auth
@require_area("/orders")
def list_orders_route():
    """List orders visible to the signed-in user; ?status= filters by status."""
    try:
        orders = order_service.visible_orders(
            get_state().orders, g.current_user, request.args.get("status")
        )
        return jsonify({"items": [_order_payload(o) for o in orders], "count": len(orders)}), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)


@orders_bp.post("")
@require_auth
@require_role(ROLE_OWNER)
def create_order_route():
    """
    Create an order.

    Request body:
    {
        "customer_id": "1717000000000",
        "items": [{"service_id": "1", "quantity": 2}],
        "advance_paid": 500,
        "delivery_date": "2026-11-01",
        "tailor_id": "2"           (optional)
    }

    Returns:
        201: Order created
        400: Validation failed; a missing measurement also returns
             "missing_category"
    """
    try:
        data = request.get_json(silent=True) or {}
        order = order_service.create_order(get_state(), data)
        return jsonify(_order_payload(order)), 201
    except MissingMeasurementError as exc:
        return jsonify({
            "error": str(exc),
            "missing_category": exc.category,
            "customer_id": exc.customer_id,
        }), 400
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to create order")
        return jsonify({"error": "Failed to create order"}), 500


@orders_bp.get("/<order_id>")
@require_auth
@require_area("/orders")
def get_order_route(order_id):
    try:
        return jsonify(_order_payload(_get_visible_order(order_id))), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)


@orders_bp.patch("/<order_id>/status")
@require_auth
@require_role(ROLE_OWNER, ROLE_TAILOR)
def update_status_route(order_id):
    """
    Move an order to any status.

    Request body: {"status": "Stitching"}
    """
    try:
        data = request.get_json(silent=True) or {}
        _get_visible_order(order_id)
        order = order_service.update_status(get_state(), order_id, data.get("status"))
        return jsonify(_order_payload(order)), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to update order status")
        return jsonify({"error": "Failed to update order status"}), 500
