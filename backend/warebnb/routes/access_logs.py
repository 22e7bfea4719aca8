# Overview: Flask API routes for warehouse gate access logs.

from flask import Blueprint, request, jsonify, current_app, g

from ..services import access_log_service
from ..responses import SERVICE_ERRORS, error_response
from ..decorators import require_auth, require_permission


access_logs_bp = Blueprint("access_logs", __name__, url_prefix="/api/v1/access-logs")


@access_logs_bp.get("")
@require_auth
@require_permission("VIEW_ACCESS_LOGS")
def list_access_logs_route():
    """
    Query: warehouse_id, visitor_type, status, search (name, company, plate)
    """
    try:
        logs = access_log_service.list_access_logs(
            g.current_user,
            warehouse_id=request.args.get("warehouse_id", type=int),
            visitor_type=request.args.get("visitor_type"),
            status=request.args.get("status"),
            search=request.args.get("search"),
        )
        return jsonify({"success": True, "data": [log.to_dict() for log in logs]}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to list access logs")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@access_logs_bp.post("")
@require_auth
@require_permission("MANAGE_ACCESS_LOGS")
def check_in_route():
    try:
        log = access_log_service.check_in(g.current_user, request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": log.to_dict(), "message": "Checked in"}), 201

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to check in visitor")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@access_logs_bp.post("/<int:log_id>/check-out")
@require_auth
@require_permission("MANAGE_ACCESS_LOGS")
def check_out_route(log_id: int):
    try:
        log = access_log_service.check_out(g.current_user, log_id, request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": log.to_dict(), "message": "Checked out"}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to check out visitor")
        return jsonify({"success": False, "error": "Internal server error"}), 500
