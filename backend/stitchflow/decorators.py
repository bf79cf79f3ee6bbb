# Overview: Request and role decorators for API routes.

from functools import wraps
from flask import jsonify, g

from .services.state_service import get_state
from .permissions import can_access


def _is_authenticated() -> bool:
    return getattr(g, "current_user", None) is not None


def require_auth(f):
    """
    Require a signed-in staff member.

    Sets the following Flask g attributes:
    - g.current_user: The signed-in User record
    - g.app_state: The request's AppState (via get_state)

    Returns 401 if nobody is signed in. Sign-in is a username lookup with
    no credential check, so this gates navigation rather than securing data.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        state = get_state()
        if state.current_user is None:
            return jsonify({"error": "Authentication required"}), 401

        g.current_user = state.current_user
        return f(*args, **kwargs)

    return decorated_function


def require_area(path: str):
    """
    Require the signed-in role to reach a navigation area (e.g. "/inventory").
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            # Ensure @require_auth was called first
            if not _is_authenticated():
                return jsonify({"error": "Authentication required"}), 401

            if not can_access(g.current_user.role, path):
                return jsonify({
                    "error": "Permission denied",
                    "required_area": path,
                    "message": f"{g.current_user.role} cannot access {path}",
                }), 403

            return f(*args, **kwargs)

        return decorated_function
    return decorator


def require_role(*roles: str):
    """Require the signed-in staff member to hold one of the given roles."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not _is_authenticated():
                return jsonify({"error": "Authentication required"}), 401

            if g.current_user.role not in roles:
                return jsonify({
                    "error": "Permission denied",
                    "required_roles": list(roles),
                    "message": f"Requires one of: {', '.join(roles)}",
                }), 403

            return f(*args, **kwargs)

        return decorated_function
    return decorator
