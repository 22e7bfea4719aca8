# Overview: Flask API routes for service orders.

from flask import Blueprint, request, jsonify, current_app, g

from ..services import order_service
from ..responses import SERVICE_ERRORS, error_response
from ..decorators import require_auth, require_permission, require_any_permission


orders_bp = Blueprint("orders", __name__, url_prefix="/api/v1/orders")


@orders_bp.get("")
@require_auth
@require_permission("VIEW_ORDERS")
def list_orders_route():
    try:
        orders = order_service.list_orders(
            g.current_user,
            status=request.args.get("status"),
            booking_id=request.args.get("booking_id", type=int),
        )
        return jsonify({"success": True, "data": [o.to_dict(include_items=False) for o in orders]}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to list service orders")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@orders_bp.post("")
@require_auth
@require_permission("CREATE_ORDER")
def create_order_route():
    """
    Create a service order.

    Body: warehouse_id, booking_id (optional), priority, requested_date,
    notes, items: [{service_id, quantity, notes}]
    Unit prices come from the warehouse service list.
    """
    try:
        order = order_service.create_order(g.current_user, request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": order.to_dict(), "message": "Order created"}), 201

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to create service order")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@orders_bp.get("/<int:order_id>")
@require_auth
@require_permission("VIEW_ORDERS")
def get_order_route(order_id: int):
    try:
        order = order_service.get_order(g.current_user, order_id)
        return jsonify({"success": True, "data": order.to_dict()}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to load service order")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@orders_bp.patch("/<int:order_id>")
@require_auth
@require_any_permission("CREATE_ORDER", "MANAGE_ORDERS")
def update_order_route(order_id: int):
    try:
        order = order_service.update_order(g.current_user, order_id, request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": order.to_dict(), "message": "Order updated"}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to update service order")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@orders_bp.post("/<int:order_id>/cancel")
@require_auth
@require_any_permission("CREATE_ORDER", "MANAGE_ORDERS")
def cancel_order_route(order_id: int):
    try:
        order = order_service.cancel_order(g.current_user, order_id)
        return jsonify({"success": True, "data": order.to_dict(), "message": "Order cancelled"}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to cancel service order")
        return jsonify({"success": False, "error": "Internal server error"}), 500
