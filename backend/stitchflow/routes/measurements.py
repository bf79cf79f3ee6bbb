# Overview: Flask API routes for measurement sheets; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, current_app

from ..decorators import require_auth, require_area
from ..services import measurement_service
from ..services.state_service import get_state
from ..validation import CLIENT_ERRORS, error_status


measurements_bp = Blueprint("measurements", __name__, url_prefix="/api/measurements")


@measurements_bp.get("")
@require_auth
@require_area("/measurements")
def list_measurements_route():
    """List measurement sheets, optionally filtered by ?q= (customer name or phone)."""
    state = get_state()
    items = measurement_service.search_measurements(
        state.measurements, state.customers, request.args.get("q")
    )
    return jsonify({"items": [m.to_dict() for m in items], "count": len(items)}), 200


@measurements_bp.get("/templates")
@require_auth
@require_area("/measurements")
def templates_route():
    return jsonify(measurement_service.field_templates()), 200


@measurements_bp.post("")
@require_auth
@require_area("/measurements")
def create_measurement_route():
    """
    Record a measurement sheet.

    Request body:
    {
        "customer_id": "1717000000000",
        "type": "Shirt",            (Shirt, Pant or Custom)
        "details": {"Chest": "40", "Collar": "15.5"},
        "remarks": "Slim fit"       (optional)
    }
    """
    try:
        data = request.get_json(silent=True) or {}
        measurement = measurement_service.add_measurement(get_state(), data)
        return jsonify(measurement.to_dict()), 201
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to record measurement")
        return jsonify({"error": "Failed to record measurement"}), 500


@measurements_bp.delete("/<measurement_id>")
@require_auth
@require_area("/measurements")
def delete_measurement_route(measurement_id):
    try:
        measurement_service.delete_measurement(get_state(), measurement_id)
        return jsonify({"message": "Measurement deleted"}), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to delete measurement")
        return jsonify({"error": "Failed to delete measurement"}), 500


@measurements_bp.post("/styling-tips")
@require_auth
@require_area("/measurements")
def styling_tips_route():
    """
    Styling advice for unsaved dimensions (the form's "AI Stylist" button).

    Request body: {"type": "Shirt", "details": {...}, "remarks": "..."}
    Returns the advice and the remarks with the tip appended. Collaborator
    failures return a fallback tip, never an error.
    """
    try:
        data = request.get_json(silent=True) or {}
        advice = measurement_service.suggest_styling(data.get("type") or "Shirt", data.get("details"))
        return jsonify({
            "advice": advice,
            "remarks": measurement_service.append_tip(data.get("remarks"), advice),
        }), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)


@measurements_bp.post("/<measurement_id>/styling-tips")
@require_auth
@require_area("/measurements")
def apply_styling_tips_route(measurement_id):
    try:
        measurement = measurement_service.apply_styling_tips(get_state(), measurement_id)
        return jsonify(measurement.to_dict()), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to save styling tips")
        return jsonify({"error": "Failed to save styling tips"}), 500
