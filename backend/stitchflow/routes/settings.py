# Overview: Flask API routes for shop settings and data export; returns JSON responses.

from flask import Blueprint, request, jsonify, current_app

from ..decorators import require_auth, require_area
from ..services import settings_service, store_service
from ..services.state_service import get_state
from ..validation import CLIENT_ERRORS, error_status


settings_bp = Blueprint("settings", __name__, url_prefix="/api/settings")


@settings_bp.get("")
@require_auth
def get_settings_route():
    """Shop profile. Readable by every signed-in role (currency, shop name)."""
    return jsonify(settings_service.get_settings(get_state()).to_dict()), 200


@settings_bp.put("")
@require_auth
@require_area("/settings")
def update_settings_route():
    """
    Update the shop profile.

    Request body (all optional):
    {"tax_rate": 5, "shop_name": "...", "address": "...", "currency": "₹"}
    """
    try:
        data = request.get_json(silent=True) or {}
        settings = settings_service.update_settings(get_state(), data)
        return jsonify(settings.to_dict()), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to update settings")
        return jsonify({"error": "Failed to update settings"}), 500


@settings_bp.get("/export")
@require_auth
@require_area("/settings")
def export_route():
    """Every persisted slice as raw JSON, keyed by storage key."""
    try:
        return jsonify(store_service.export_snapshot()), 200
    except Exception:
        current_app.logger.exception("Failed to export data")
        return jsonify({"error": "Failed to export data"}), 500
