# Overview: Flask API routes for sign-in; parses input and returns JSON responses.

"""
Authentication API routes

LIMITATION: sign-in resolves a staff account by username alone. Any
password sent by the client is ignored.
"""

from flask import Blueprint, request, jsonify, current_app, g

from ..services import auth_service
from ..services.auth_service import AuthError
from ..services.state_service import get_state
from ..decorators import require_auth
from ..permissions import navigation_for


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _user_payload(user) -> dict:
    return {
        "user": user.to_dict(),
        "navigation": navigation_for(user.role),
    }


@auth_bp.post("/login")
def login_route():
    """
    Sign in by username.

    Request body: {"username": "admin"}
    Returns the user and the navigation areas their role can reach.
    """
    try:
        data = request.get_json(silent=True) or {}
        user = auth_service.login(get_state(), data.get("username") or "")
        return jsonify(_user_payload(user)), 200
    except AuthError as exc:
        return jsonify({"error": str(exc)}), 401
    except Exception:
        current_app.logger.exception("Failed to login user")
        return jsonify({"error": "Login failed"}), 500


@auth_bp.post("/logout")
@require_auth
def logout_route():
    try:
        auth_service.logout(get_state())
        return jsonify({"message": "Logged out"}), 200
    except Exception:
        current_app.logger.exception("Failed to logout user")
        return jsonify({"error": "Logout failed"}), 500


@auth_bp.get("/me")
@require_auth
def me_route():
    return jsonify(_user_payload(g.current_user)), 200
