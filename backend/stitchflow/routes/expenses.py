# Overview: Flask API routes for shop expenses; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, current_app

from ..decorators import require_auth, require_area
from ..services import expense_service
from ..services.state_service import get_state
from ..validation import CLIENT_ERRORS, error_status


expenses_bp = Blueprint("expenses", __name__, url_prefix="/api/expenses")


@expenses_bp.get("")
@require_auth
@require_area("/expenses")
def list_expenses_route():
    expenses = get_state().expenses
    return jsonify({
        "items": [e.to_dict() for e in expenses],
        "count": len(expenses),
        "total": expense_service.total_expenses(expenses),
    }), 200


@expenses_bp.post("")
@require_auth
@require_area("/expenses")
def create_expense_route():
    """
    Record an expense.

    Request body:
    {
        "category": "Rent",
        "amount": 12000,
        "date": "2026-10-01",      (optional, defaults to today)
        "description": "October rent"
    }
    """
    try:
        data = request.get_json(silent=True) or {}
        expense = expense_service.add_expense(get_state(), data)
        return jsonify(expense.to_dict()), 201
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to record expense")
        return jsonify({"error": "Failed to record expense"}), 500


@expenses_bp.delete("/<expense_id>")
@require_auth
@require_area("/expenses")
def delete_expense_route(expense_id):
    try:
        expense_service.delete_expense(get_state(), expense_id)
        return jsonify({"message": "Expense deleted"}), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to delete expense")
        return jsonify({"error": "Failed to delete expense"}), 500
