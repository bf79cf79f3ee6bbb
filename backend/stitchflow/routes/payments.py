# Overview: Flask API routes for order payments; parses input and returns JSON responses.

from flask import Blueprint, jsonify, current_app

from ..decorators import require_auth, require_area
from ..services import payment_service
from ..services.payment_service import paid_amount, balance
from ..services.state_service import get_state
from ..validation import CLIENT_ERRORS, error_status


payments_bp = Blueprint("payments", __name__, url_prefix="/api/payments")


@payments_bp.get("")
@require_auth
@require_area("/payments")
def payment_summary_route():
    """Billed, paid and outstanding totals plus per-order balances."""
    return jsonify(payment_service.payment_summary(get_state().orders)), 200


@payments_bp.post("/<order_id>/settle")
@require_auth
@require_area("/payments")
def settle_payment_route(order_id):
    """
    Collect an order's outstanding balance in full.

    Settling an order that is already paid is a no-op and returns it unchanged.
    """
    try:
        order = payment_service.settle_order_payment(get_state(), order_id)
        payload = order.to_dict()
        payload["paid_amount"] = paid_amount(order)
        payload["balance"] = balance(order)
        return jsonify(payload), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to settle payment")
        return jsonify({"error": "Failed to settle payment"}), 500
