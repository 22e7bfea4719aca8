# Overview: Flask API routes for warehouses, price lists, add-on services and quotes.

# backend/warebnb/routes/warehouses.py
"""
Warehouse API routes

Browsing and quoting are open to any signed-in profile. Editing a
warehouse, its price list or its services is limited to operators of
the owning company (and root).
"""

from flask import Blueprint, request, jsonify, current_app, g

from ..services import warehouse_service
from ..services import booking_service
from ..services import pricing_service
from ..services.tenant_service import require_warehouse
from ..validation import parse_int_field
from ..responses import SERVICE_ERRORS, error_response
from ..decorators import require_auth, require_permission


warehouses_bp = Blueprint("warehouses", __name__, url_prefix="/api/v1/warehouses")


@warehouses_bp.get("")
@require_auth
@require_permission("VIEW_WAREHOUSES")
def list_warehouses_route():
    try:
        warehouses = warehouse_service.list_warehouses(city=request.args.get("city"))
        return jsonify({"success": True, "data": [w.to_dict() for w in warehouses]}), 200

    except Exception:
        current_app.logger.exception("Failed to list warehouses")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@warehouses_bp.post("/search")
@require_auth
@require_permission("VIEW_WAREHOUSES")
def search_warehouses_route():
    """
    Validate the storage search form and return matching warehouses.

    Body: location, type (pallet | area-rental), start_date, end_date,
    months (area rental), pallet_count or area_sq_ft.
    """
    try:
        params = booking_service.build_search_params(request.get_json(silent=True) or {})
        warehouses = booking_service.search_warehouses(params)
        return jsonify({
            "success": True,
            "data": {
                "params": params,
                "warehouses": [w.to_dict() for w in warehouses],
            },
        }), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to search warehouses")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@warehouses_bp.post("")
@require_auth
@require_permission("MANAGE_WAREHOUSES")
def create_warehouse_route():
    try:
        warehouse = warehouse_service.create_warehouse(g.current_user, request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": warehouse.to_dict(), "message": "Warehouse created"}), 201

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to create warehouse")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@warehouses_bp.get("/<int:warehouse_id>")
@require_auth
@require_permission("VIEW_WAREHOUSES")
def get_warehouse_route(warehouse_id: int):
    try:
        warehouse = require_warehouse(g.current_user, warehouse_id)
        data = warehouse.to_dict()
        data["available_pallets"] = booking_service.available_pallets(warehouse)
        data["available_sq_ft"] = booking_service.available_sq_ft(warehouse)
        return jsonify({"success": True, "data": data}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to load warehouse")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@warehouses_bp.patch("/<int:warehouse_id>")
@require_auth
@require_permission("MANAGE_WAREHOUSES")
def update_warehouse_route(warehouse_id: int):
    try:
        warehouse = warehouse_service.update_warehouse(
            g.current_user, warehouse_id, request.get_json(silent=True) or {}
        )
        return jsonify({"success": True, "data": warehouse.to_dict(), "message": "Warehouse updated"}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to update warehouse")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@warehouses_bp.get("/<int:warehouse_id>/pricing")
@require_auth
@require_permission("VIEW_WAREHOUSES")
def list_pricing_route(warehouse_id: int):
    try:
        require_warehouse(g.current_user, warehouse_id)
        pricing = warehouse_service.list_pricing(warehouse_id)
        return jsonify({"success": True, "data": [p.to_dict() for p in pricing]}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to list warehouse pricing")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@warehouses_bp.put("/<int:warehouse_id>/pricing")
@require_auth
@require_permission("MANAGE_PRICING")
def set_pricing_route(warehouse_id: int):
    """
    Create or replace the price list for one pricing type.

    Requires: MANAGE_PRICING permission
    Available to: root, warehouse_admin
    """
    try:
        pricing = warehouse_service.set_pricing(g.current_user, warehouse_id, request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": pricing.to_dict(), "message": "Pricing saved"}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to save warehouse pricing")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@warehouses_bp.get("/<int:warehouse_id>/services")
@require_auth
@require_permission("VIEW_WAREHOUSES")
def list_services_route(warehouse_id: int):
    try:
        require_warehouse(g.current_user, warehouse_id)
        include_inactive = request.args.get("include_inactive", "false").lower() == "true"
        services = warehouse_service.list_services(warehouse_id, include_inactive=include_inactive)
        return jsonify({"success": True, "data": [s.to_dict() for s in services]}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to list warehouse services")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@warehouses_bp.post("/<int:warehouse_id>/services")
@require_auth
@require_permission("MANAGE_PRICING")
def create_service_route(warehouse_id: int):
    try:
        service = warehouse_service.create_service(g.current_user, warehouse_id, request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": service.to_dict(), "message": "Service created"}), 201

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to create warehouse service")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@warehouses_bp.post("/quote")
@require_auth
@require_permission("VIEW_WAREHOUSES")
def quote_route():
    """
    Price a prospective booking without saving it.

    Body: type, warehouse_id (optional), pallet_count or area_sq_ft, months.
    The caller's membership tier is applied.
    """
    try:
        data = request.get_json(silent=True) or {}
        warehouse_id = data.get("warehouse_id")
        if warehouse_id is not None:
            warehouse_id = require_warehouse(g.current_user, parse_int_field(warehouse_id, "warehouse_id")).id

        booking_type = data.get("type")
        quote = pricing_service.calculate_booking_pricing(
            booking_type=booking_type,
            warehouse_id=warehouse_id,
            pallet_count=parse_int_field(data.get("pallet_count"), "pallet_count", minimum=1)
            if booking_type == "pallet" else None,
            area_sq_ft=parse_int_field(data.get("area_sq_ft"), "area_sq_ft", minimum=1)
            if booking_type == "area-rental" else None,
            months=parse_int_field(data.get("months", 1), "months", minimum=1),
            membership_tier=g.current_user.membership_tier,
            existing_pallet_count=booking_service.existing_pallet_count(g.current_user.id)
            if booking_type == "pallet" else 0,
        )
        return jsonify({"success": True, "data": quote.to_dict()}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to build quote")
        return jsonify({"success": False, "error": "Internal server error"}), 500
