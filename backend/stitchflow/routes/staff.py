# Overview: Flask API routes for staff accounts and payroll; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, current_app

from ..decorators import require_auth, require_area
from ..services import staff_service, reporting_service
from ..services.state_service import get_state
from ..validation import CLIENT_ERRORS, error_status


staff_bp = Blueprint("staff", __name__, url_prefix="/api/staff")


@staff_bp.get("")
@require_auth
@require_area("/staff")
def list_staff_route():
    """Staff accounts with salary details and workload figures."""
    state = get_state()
    rows = reporting_service.staff_overview(state.orders, state.staff)
    return jsonify({"items": rows, "count": len(rows)}), 200


@staff_bp.post("")
@require_auth
@require_area("/staff")
def create_staff_route():
    """
    Add a staff account.

    Request body:
    {
        "name": "Ravi Kumar",
        "username": "ravi",
        "role": "TAILOR",          (OWNER or TAILOR)
        "salary": 14000            (optional)
    }
    """
    try:
        data = request.get_json(silent=True) or {}
        member = staff_service.add_staff(get_state(), data)
        return jsonify(member.to_dict()), 201
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to create staff account")
        return jsonify({"error": "Failed to create staff account"}), 500


@staff_bp.delete("/<staff_id>")
@require_auth
@require_area("/staff")
def delete_staff_route(staff_id):
    try:
        staff_service.delete_staff(get_state(), staff_id)
        return jsonify({"message": "Staff account deleted"}), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to delete staff account")
        return jsonify({"error": "Failed to delete staff account"}), 500


@staff_bp.post("/<staff_id>/pay-salary")
@require_auth
@require_area("/staff")
def pay_salary_route(staff_id):
    """
    Pay a staff member's salary. Records a Salary expense dated today.

    No duplicate guard: calling twice records two expenses.
    """
    try:
        member, expense = staff_service.disburse_salary(get_state(), staff_id)
        return jsonify({"staff": member.to_dict(), "expense": expense.to_dict()}), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to pay salary")
        return jsonify({"error": "Failed to pay salary"}), 500


@staff_bp.get("/<staff_id>/performance")
@require_auth
@require_area("/staff")
def performance_route(staff_id):
    try:
        return jsonify(staff_service.performance(get_state(), staff_id)), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
