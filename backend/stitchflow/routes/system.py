# backend/stitchflow/routes/system.py
"""
System health endpoint.

Reports database connectivity and which state slices are persisted.
"""

import time
from flask import Blueprint, current_app, jsonify
from ..services import store_service

system_bp = Blueprint("system", __name__)


def check_database_health() -> dict:
    """
    Check database connectivity by listing persisted slice rows.

    Returns dict with status and details.
    """
    start_time = time.time()
    try:
        slices = store_service.list_slices()
        elapsed_ms = (time.time() - start_time) * 1000
        return {
            "status": "healthy",
            "latency_ms": round(elapsed_ms, 2),
            "details": {
                "persisted_slices": len(slices),
                "expected_slices": len(store_service.ALL_SLICES),
            },
        }
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Database health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Database error",
        }


@system_bp.get("/api/health")
def health():
    database = check_database_health()
    status_code = 200 if database["status"] == "healthy" else 503
    return jsonify({"status": database["status"], "database": database}), status_code
