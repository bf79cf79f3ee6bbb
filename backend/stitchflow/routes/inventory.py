# Overview: Flask API routes for workshop inventory; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, current_app

from ..decorators import require_auth, require_area
from ..services import inventory_service
from ..services.reporting_service import is_low_stock
from ..services.state_service import get_state
from ..validation import CLIENT_ERRORS, error_status


inventory_bp = Blueprint("inventory", __name__, url_prefix="/api/inventory")


def _item_payload(item) -> dict:
    payload = item.to_dict()
    payload["is_low_stock"] = is_low_stock(item)
    return payload


@inventory_bp.get("")
@require_auth
@require_area("/inventory")
def list_inventory_route():
    """
    List inventory items.

    Query params:
        q: Name or category contains (case-insensitive)
        low_only: "true" to list only items at or below their threshold
    """
    items = inventory_service.search_items(get_state().inventory, request.args.get("q"))
    if request.args.get("low_only", "").lower() in ("1", "true", "yes"):
        items = [item for item in items if is_low_stock(item)]
    return jsonify({"items": [_item_payload(i) for i in items], "count": len(items)}), 200


@inventory_bp.post("")
@require_auth
@require_area("/inventory")
def create_inventory_route():
    try:
        data = request.get_json(silent=True) or {}
        item = inventory_service.add_item(get_state(), data)
        return jsonify(_item_payload(item)), 201
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to create inventory item")
        return jsonify({"error": "Failed to create inventory item"}), 500


@inventory_bp.put("/<item_id>")
@require_auth
@require_area("/inventory")
def update_inventory_route(item_id):
    try:
        data = request.get_json(silent=True) or {}
        item = inventory_service.update_item(get_state(), item_id, data)
        return jsonify(_item_payload(item)), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to update inventory item")
        return jsonify({"error": "Failed to update inventory item"}), 500


@inventory_bp.delete("/<item_id>")
@require_auth
@require_area("/inventory")
def delete_inventory_route(item_id):
    try:
        inventory_service.delete_item(get_state(), item_id)
        return jsonify({"message": "Inventory item deleted"}), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
    except Exception:
        current_app.logger.exception("Failed to delete inventory item")
        return jsonify({"error": "Failed to delete inventory item"}), 500
