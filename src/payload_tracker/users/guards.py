from __future__ import annotations

from functools import wraps

from flask import session

from ..common.http import json_error
from ..core.enums import Role
from .service import SessionUser


def login_required(view):
    """Pass the logged-in ``SessionUser`` as the view's first argument."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        current_user = SessionUser.from_session(session)
        if not current_user:
            return json_error("Faça login para continuar.", 401)
        return view(current_user, *args, **kwargs)

    return wrapper


def role_required(role: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            current_user = SessionUser.from_session(session)
            if not current_user:
                return json_error("Faça login para continuar.", 401)
            if current_user.role != role:
                return json_error("Você não tem permissão para esta ação.", 403)
            return view(current_user, *args, **kwargs)

        return wrapper

    return decorator


admin_required = role_required(Role.ADMIN)
driver_required = role_required(Role.DRIVER)
