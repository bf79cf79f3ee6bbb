# Overview: Service-layer operations for sign-in; username lookup against the staff slice.

"""
Authentication Service

LIMITATION (explicit): sign-in is a username lookup only. A password may be
sent by clients but is never verified. Real credential checks would be new
functionality, not part of this shop dashboard.
"""

from flask import current_app

from ..models import User
from .staff_service import find_by_username


class AuthError(Exception):
    """Raised when no staff account matches the supplied username."""
    pass


def login(state, username: str) -> User:
    """
    Sign a staff member in by username and persist them as the current user.

    Raises:
        AuthError: If the username is empty or unknown
    """
    if not isinstance(username, str) or not username.strip():
        raise AuthError("username required")

    user = find_by_username(state.staff, username)
    if user is None:
        current_app.logger.info("Rejected sign-in for unknown username %r", username)
        raise AuthError("Invalid credentials. Try 'admin' or 'john'")

    state.set_current_user(user)
    current_app.logger.info("Signed in %s (%s)", user.username, user.role)
    return user


def logout(state) -> None:
    user = state.current_user
    state.logout()
    if user is not None:
        current_app.logger.info("Signed out %s", user.username)
