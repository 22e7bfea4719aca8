# Overview: JSON error envelope for service-layer exceptions.

from flask import jsonify

from .services.auth_service import PasswordValidationError
from .services.permission_service import PermissionDeniedError
from .services.role_service import RoleSwitchError
from .validation import ConflictError, NotFoundError, ValidationError


# Exceptions a route maps to a 4xx response
SERVICE_ERRORS = (
    ValidationError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    PasswordValidationError,
    RoleSwitchError,
)


def error_status(exc: Exception) -> int:
    if isinstance(exc, RoleSwitchError):
        return exc.status
    if isinstance(exc, PermissionDeniedError):
        return 403
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ConflictError):
        return 409
    return 400


def error_response(exc: Exception):
    return jsonify({"success": False, "error": str(exc)}), error_status(exc)
