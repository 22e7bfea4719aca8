# Overview: Flask API routes for the "My Company" profile.

from flask import Blueprint, request, jsonify, current_app, g

from ..services import company_service
from ..responses import SERVICE_ERRORS, error_response
from ..decorators import require_auth, require_permission


companies_bp = Blueprint("companies", __name__, url_prefix="/api/v1/companies")


@companies_bp.get("/me")
@require_auth
def get_my_company_route():
    try:
        company = company_service.get_company_for(g.current_user, request.args.get("company_id", type=int))
        return jsonify({"success": True, "data": company.to_dict()}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to load company")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@companies_bp.patch("/me")
@require_auth
@require_permission("MANAGE_COMPANY")
def update_my_company_route():
    """
    Edit the company profile.

    Requires: MANAGE_COMPANY permission
    Available to: root, warehouse_admin, warehouse_supervisor
    """
    try:
        data = request.get_json(silent=True) or {}
        company = company_service.update_company(
            g.current_user,
            data,
            company_id=request.args.get("company_id", type=int),
        )
        return jsonify({"success": True, "data": company.to_dict(), "message": "Company updated"}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to update company")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@companies_bp.post("")
@require_auth
@require_permission("SYSTEM_ADMIN")
def create_company_route():
    try:
        company = company_service.create_company(request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": company.to_dict(), "message": "Company created"}), 201

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to create company")
        return jsonify({"success": False, "error": "Internal server error"}), 500
