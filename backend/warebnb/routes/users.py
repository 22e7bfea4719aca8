# Overview: Flask API routes for the signed-in profile (settings form).

from flask import Blueprint, request, jsonify, current_app, g

from ..services import profile_service, permission_service
from ..responses import SERVICE_ERRORS, error_response
from ..decorators import require_auth


users_bp = Blueprint("users", __name__, url_prefix="/api/v1/users")


@users_bp.get("/me")
@require_auth
def get_me_route():
    return jsonify({"success": True, "data": profile_service.serialize_profile(g.current_user)}), 200


@users_bp.patch("/me")
@require_auth
def update_me_route():
    try:
        profile = profile_service.update_profile(g.current_user, request.get_json(silent=True) or {})
        return jsonify({
            "success": True,
            "data": profile_service.serialize_profile(profile),
            "message": "Profile updated",
        }), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to update profile")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@users_bp.get("/me/permissions")
@require_auth
def get_my_permissions_route():
    """Permission definitions granted by the stored role, grouped by category."""
    return jsonify({
        "success": True,
        "data": permission_service.describe_profile_permissions(g.current_user),
    }), 200
