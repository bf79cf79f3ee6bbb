# Overview: Flask API routes for the stitching service catalog; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, current_app

from ..decorators import require_auth, require_area
from ..services import catalog_service
from ..services.state_service import get_state
from ..validation import CLIENT_ERRORS, error_status


catalog_bp = Blueprint("catalog", __name__, url_prefix="/api/services")


@catalog_bp.get("")
@require_auth
def list_services_route():
    """Catalog entries. Readable by every signed-in role (order forms need it)."""
    services = get_state().services
    return jsonify({"items": [s.to_dict() for s in services], "count": len(services)}), 200


@catalog_bp.post("")
@require_auth
@require_area("/services")
def create_service_route():
    try:
        data = request.get_json(silent=True) or {}
        service = catalog_service.add_service(get_state(), data)
        return jsonify(service.to_dict()), 201
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to create service")
        return jsonify({"error": "Failed to create service"}), 500


@catalog_bp.put("/<service_id>")
@require_auth
@require_area("/services")
def update_service_route(service_id):
    try:
        data = request.get_json(silent=True) or {}
        service = catalog_service.update_service(get_state(), service_id, data)
        return jsonify(service.to_dict()), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to update service")
        return jsonify({"error": "Failed to update service"}), 500


@catalog_bp.delete("/<service_id>")
@require_auth
@require_area("/services")
def delete_service_route(service_id):
    try:
        catalog_service.delete_service(get_state(), service_id)
        return jsonify({"message": "Service deleted"}), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to delete service")
        return jsonify({"error": "Failed to delete service"}), 500
