# Overview: Flask API routes for sidebar navigation and the root test-role switcher.

from flask import Blueprint, request, jsonify, current_app, g, session

from ..services import navigation_service
from ..services import role_service
from ..responses import SERVICE_ERRORS, error_response
from ..decorators import require_auth


navigation_bp = Blueprint("navigation", __name__, url_prefix="/api/v1/navigation")


@navigation_bp.get("")
@require_auth
def get_navigation_route():
    """
    Sidebar and header state for the current profile.

    Query: path=<current pathname> (marks the active item)
    """
    try:
        test_role = g.test_role
        data = navigation_service.build_navigation(g.current_user, request.args.get("path"), test_role)
        return jsonify({"success": True, "data": data}), 200

    except Exception:
        current_app.logger.exception("Failed to build navigation")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@navigation_bp.post("/test-role")
@require_auth
def switch_test_role_route():
    """
    Root only: preview the dashboard as another role.

    Body: {"role": "<role>"}
    Sets the session key and the root-test-role cookie (24h).
    """
    try:
        data = request.get_json(silent=True) or {}
        role = data.get("role")
        redirect = role_service.switch_test_role(g.current_user, role, session)

        response = jsonify({
            "success": True,
            "data": {"test_role": role, "redirect": redirect},
            "message": f"Viewing as {role_service.role_label(role)}",
        })
        response.set_cookie(
            role_service.TEST_ROLE_COOKIE,
            role,
            max_age=current_app.config["ROOT_ROLE_COOKIE_MAX_AGE"],
            path="/",
            samesite="Lax",
        )
        return response, 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to switch test role")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@navigation_bp.delete("/test-role")
@require_auth
def clear_test_role_route():
    try:
        redirect = role_service.clear_test_role(g.current_user, session)
        response = jsonify({"success": True, "data": {"test_role": None, "redirect": redirect}})
        response.delete_cookie(role_service.TEST_ROLE_COOKIE, path="/")
        return response, 200

    except Exception:
        current_app.logger.exception("Failed to clear test role")
        return jsonify({"success": False, "error": "Internal server error"}), 500
