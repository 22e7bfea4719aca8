# Overview: Flask API routes for health and version checks.

from flask import Blueprint, jsonify, current_app
from sqlalchemy import text

from ..extensions import db


system_bp = Blueprint("system", __name__)

API_VERSION = "v1"


@system_bp.get("/health")
def health_route():
    """Liveness plus a trivial database round trip. Public."""
    try:
        db.session.execute(text("SELECT 1"))
        return jsonify({"status": "ok", "database": "ok"}), 200
    except Exception:
        current_app.logger.exception("Health check failed")
        return jsonify({"status": "degraded", "database": "unavailable"}), 503


@system_bp.get("/version")
def version_route():
    return jsonify({"api": API_VERSION, "app": current_app.config.get("APP_VERSION")}), 200
