"""Session based login check for the account pages.

The account id is stored as `user_id` in the Flask session; signing in is
handled outside the HTML clients.
"""

from functools import wraps
from typing import Callable, Optional, TypeVar, Any

from flask import session
from shopfront.app.common.errors import abort_client

F = TypeVar("F", bound=Callable[..., Any])

SESSION_ACCOUNT_KEY = "user_id"


def current_account_id() -> Optional[int]:
    return session.get(SESSION_ACCOUNT_KEY) or None


def login_required(fn: F) -> F:
    """Answer with the 401 error page unless an account is signed in."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        if current_account_id() is None:
            abort_client(401, "unauthorized", "Authentication required")
        return fn(*args, **kwargs)

    return wrapper  # type: ignore
