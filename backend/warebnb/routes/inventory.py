# Overview: Flask API routes for pallet inventory.

from flask import Blueprint, request, jsonify, current_app, g

from ..services import inventory_service
from ..responses import SERVICE_ERRORS, error_response
from ..decorators import require_auth, require_permission


inventory_bp = Blueprint("inventory", __name__, url_prefix="/api/v1/inventory")


@inventory_bp.get("")
@require_auth
@require_permission("VIEW_INVENTORY")
def list_inventory_route():
    try:
        items = inventory_service.list_items(
            g.current_user,
            booking_id=request.args.get("booking_id", type=int),
            warehouse_id=request.args.get("warehouse_id", type=int),
            status=request.args.get("status"),
        )
        return jsonify({"success": True, "data": [item.to_dict() for item in items]}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to list inventory")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@inventory_bp.post("/bookings/<int:booking_id>/check-in")
@require_auth
@require_permission("MANAGE_INVENTORY")
def check_in_pallets_route(booking_id: int):
    """
    Body: {"pallets": [{"pallet_code", "description", "quantity", "location"}]}
    """
    try:
        items = inventory_service.check_in_pallets(g.current_user, booking_id, request.get_json(silent=True) or {})
        return jsonify({
            "success": True,
            "data": [item.to_dict() for item in items],
            "message": f"{len(items)} pallet(s) received",
        }), 201

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to check in pallets")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@inventory_bp.post("/<int:item_id>/ship")
@require_auth
@require_permission("MANAGE_INVENTORY")
def ship_item_route(item_id: int):
    try:
        item = inventory_service.ship_item(g.current_user, item_id)
        return jsonify({"success": True, "data": item.to_dict(), "message": "Item shipped"}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to ship inventory item")
        return jsonify({"success": False, "error": "Internal server error"}), 500
