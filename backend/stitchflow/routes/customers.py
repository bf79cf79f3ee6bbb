# Overview: Flask API routes for customers; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, current_app

from ..decorators import require_auth, require_area
from ..services import customer_service
from ..services.state_service import get_state
from ..validation import CLIENT_ERRORS, error_status


customers_bp = Blueprint("customers", __name__, url_prefix="/api/customers")


@customers_bp.get("")
@require_auth
@require_area("/customers")
def list_customers_route():
    """List customers, optionally filtered by ?q= (name, phone or email)."""
    state = get_state()
    customers = customer_service.search_customers(state.customers, request.args.get("q"))
    return jsonify({"items": [c.to_dict() for c in customers], "count": len(customers)}), 200


@customers_bp.post("")
@require_auth
@require_area("/customers")
def create_customer_route():
    """
    Create a customer.

    Request body: {"name": "...", "phone": "...", "email": "...", "address": "..."}

    Returns:
        201: Customer created
        400: Name or phone missing
        409: Phone number already on file
    """
    try:
        data = request.get_json(silent=True) or {}
        customer = customer_service.add_customer(get_state(), data)
        return jsonify(customer.to_dict()), 201
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to create customer")
        return jsonify({"error": "Failed to create customer"}), 500


@customers_bp.put("/<customer_id>")
@require_auth
@require_area("/customers")
def update_customer_route(customer_id):
    try:
        data = request.get_json(silent=True) or {}
        customer = customer_service.update_customer(get_state(), customer_id, data)
        return jsonify(customer.to_dict()), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to update customer")
        return jsonify({"error": "Failed to update customer"}), 500


@customers_bp.delete("/<customer_id>")
@require_auth
@require_area("/customers")
def delete_customer_route(customer_id):
    try:
        customer_service.delete_customer(get_state(), customer_id)
        return jsonify({"message": "Customer deleted"}), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to delete customer")
        return jsonify({"error": "Failed to delete customer"}), 500


@customers_bp.get("/<customer_id>/history")
@require_auth
@require_area("/customers")
def customer_history_route(customer_id):
    """Orders placed by a customer, with spend grouped by year (newest first)."""
    try:
        return jsonify(customer_service.customer_history(get_state(), customer_id)), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
