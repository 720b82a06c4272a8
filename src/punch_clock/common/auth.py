from __future__ import annotations

from functools import wraps

from flask import session

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError


def current_user_id() -> str:
    user_id = session.get("user_id")
    if not user_id:
        raise AuthenticationError("Please sign in to continue")
    return str(user_id)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        current_user_id()
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            current_user_id()
            if session.get("role") not in allowed:
                raise AuthorizationError("You do not have permission")
            return view(*args, **kwargs)

        return wrapper

    return decorator
