# Overview: Flask API routes for the dashboard and financial reports; returns JSON responses.

from flask import Blueprint, jsonify

from ..decorators import require_auth, require_area
from ..services import advisory_service, reporting_service
from ..services.state_service import get_state


reports_bp = Blueprint("reports", __name__, url_prefix="/api/reports")

INSIGHT_FALLBACK = (
    "Focus on delivery efficiency: clearing ready orders quickly frees "
    "workshop capacity and brings in outstanding balances."
)


@reports_bp.get("/dashboard")
@require_auth
@require_area("/")
def dashboard_route():
    return jsonify(reporting_service.dashboard_summary(get_state())), 200


@reports_bp.get("")
@require_auth
@require_area("/reports")
def full_report_route():
    """Revenue, tax, expenses, profit, monthly series and delivery efficiency."""
    return jsonify(reporting_service.full_report(get_state())), 200


@reports_bp.post("/insight")
@require_auth
@require_area("/reports")
def insight_route():
    """
    One-line business recommendation for the current figures.

    Falls back to a static recommendation when the advisory API is unavailable.
    """
    report = reporting_service.full_report(get_state())
    prompt = (
        f"Revenue: {report['revenue']}. Expenses: {report['total_expenses']}. "
        f"Profit: {report['profit']}. Delivery efficiency: {report['delivery_efficiency']}%. "
        "Suggest one improvement."
    )
    insight = advisory_service.generate_advice(
        prompt,
        system_instruction=advisory_service.ANALYST_INSTRUCTION,
        fallback=INSIGHT_FALLBACK,
    )
    return jsonify({"insight": insight}), 200
