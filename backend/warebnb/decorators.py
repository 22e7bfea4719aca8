# Overview: Request and permission decorators for API routes.

from functools import wraps
from flask import request, jsonify, g

from .services import session_service, permission_service
from .services.permission_service import PermissionDeniedError
from .permissions import validate_permission_code


def _bearer_token() -> str | None:
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme != "Bearer" or not token:
        return None
    return token


def _unauthenticated(message: str = "Authentication required"):
    return jsonify({"success": False, "error": message}), 401


def _check_codes(codes) -> None:
    unknown = [code for code in codes if not validate_permission_code(code)]
    if unknown:
        raise ValueError(f"Unknown permission code: {', '.join(unknown)}")


def require_auth(f):
    """
    Require a valid bearer session.

    Sets g.current_user (the Profile) and g.session_context. Missing,
    expired, revoked or idle tokens and deactivated profiles get 401.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = _bearer_token()
        if not token:
            return _unauthenticated()

        context = session_service.validate_session(token)
        if not context:
            return _unauthenticated("Invalid or expired token")

        g.current_user = context.profile
        g.session_context = context
        return f(*args, **kwargs)

    return decorated_function


def _permission_guard(codes: tuple[str, ...]):
    """
    Shared body of the permission decorators: passes when the stored role
    grants any of `codes`. The root preview role is never consulted.
    """
    _check_codes(codes)

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not hasattr(g, "current_user"):
                return _unauthenticated()

            try:
                permission_service.require_any_permission(
                    profile=g.current_user,
                    permission_codes=codes,
                    resource=request.path,
                    ip_address=request.remote_addr,
                    user_agent=request.headers.get("User-Agent"),
                )
            except PermissionDeniedError as e:
                body = {"success": False, "error": "Permission denied", "message": str(e)}
                if len(codes) == 1:
                    body["required_permission"] = codes[0]
                else:
                    body["required_permissions"] = list(codes)
                return jsonify(body), 403

            return f(*args, **kwargs)

        return decorated_function
    return decorator


def require_permission(permission_code: str):
    """Require one permission of the authenticated profile's stored role."""
    return _permission_guard((permission_code,))


def require_any_permission(*permission_codes):
    """Require any of the given permissions (e.g. CREATE_ORDER for clients, MANAGE_ORDERS for staff)."""
    return _permission_guard(tuple(permission_codes))
