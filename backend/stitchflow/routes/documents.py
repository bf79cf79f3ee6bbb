# Overview: Flask API routes for printable documents; returns JSON or plain text.

from flask import Blueprint, request, jsonify, g, Response

from ..decorators import require_auth, require_area
from ..services import document_service, order_service
from ..services.state_service import get_state
from ..validation import CLIENT_ERRORS, NotFoundError, error_status


documents_bp = Blueprint("documents", __name__, url_prefix="/api/documents")


@documents_bp.get("/job-card/<order_id>")
@require_auth
@require_area("/orders")
def job_card_route(order_id):
    """
    Job card for an order. ?format=text returns a printable plain-text card.

    Tailors can only print cards for orders assigned to them.
    """
    try:
        state = get_state()
        order = order_service.get_order(state, order_id)
        if not order_service.visible_orders([order], g.current_user):
            raise NotFoundError(f"Order {order_id} not found")

        document = document_service.render_job_card(state, order_id)
        if request.args.get("format") == "text":
            return Response(document["text"], mimetype="text/plain"), 200
        return jsonify(document), 200
    except CLIENT_ERRORS as exc:
        return jsonify({"error": str(exc)}), error_status(exc)
