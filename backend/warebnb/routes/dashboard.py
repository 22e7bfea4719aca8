# Overview: Flask API routes for the dashboard home and the security event feed.

from flask import Blueprint, request, jsonify, current_app, g

from ..extensions import db
from ..models import SecurityEvent
from ..services import dashboard_service
from ..responses import SERVICE_ERRORS, error_response
from ..decorators import require_auth, require_permission


dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/v1/dashboard")


@dashboard_bp.get("/summary")
@require_auth
def summary_route():
    try:
        test_role = g.test_role
        data = dashboard_service.build_summary(g.current_user, test_role=test_role)
        return jsonify({"success": True, "data": data}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to build dashboard summary")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@dashboard_bp.get("/security-events")
@require_auth
@require_permission("VIEW_SECURITY_EVENTS")
def security_events_route():
    """
    Recent security events, newest first.

    Query: event_type, limit (default 100, max 500)
    """
    try:
        limit = min(request.args.get("limit", 100, type=int), 500)
        query = db.session.query(SecurityEvent)
        event_type = request.args.get("event_type")
        if event_type:
            query = query.filter(SecurityEvent.event_type == event_type)
        events = query.order_by(SecurityEvent.occurred_at.desc(), SecurityEvent.id.desc()).limit(limit).all()
        return jsonify({"success": True, "data": [e.to_dict() for e in events]}), 200

    except Exception:
        current_app.logger.exception("Failed to list security events")
        return jsonify({"success": False, "error": "Internal server error"}), 500
