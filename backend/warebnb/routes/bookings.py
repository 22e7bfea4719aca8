# Overview: Flask API routes for bookings and drop-off time proposals.

# backend/warebnb/routes/bookings.py
"""Booking API routes with permission enforcement and tenant scoping"""

from flask import Blueprint, request, jsonify, current_app, g

from ..services import booking_service
from ..responses import SERVICE_ERRORS, error_response
from ..decorators import require_auth, require_permission


bookings_bp = Blueprint("bookings", __name__, url_prefix="/api/v1/bookings")


@bookings_bp.get("")
@require_auth
@require_permission("VIEW_BOOKINGS")
def list_bookings_route():
    """
    List bookings visible to the caller.

    Query: status, warehouse_id
    Clients see their own bookings, operators their company's warehouses.
    """
    try:
        bookings = booking_service.list_bookings(
            g.current_user,
            status=request.args.get("status"),
            warehouse_id=request.args.get("warehouse_id", type=int),
        )
        return jsonify({"success": True, "data": [b.to_dict() for b in bookings]}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to list bookings")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@bookings_bp.post("")
@require_auth
@require_permission("CREATE_BOOKING")
def create_booking_route():
    """
    Create a pending booking. The total is always priced server-side.

    Requires: CREATE_BOOKING permission
    Available to: root, warehouse_client
    """
    try:
        booking = booking_service.create_booking(g.current_user, request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": booking.to_dict(), "message": "Booking created"}), 201

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to create booking")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@bookings_bp.get("/<int:booking_id>")
@require_auth
@require_permission("VIEW_BOOKINGS")
def get_booking_route(booking_id: int):
    try:
        booking = booking_service.get_booking(g.current_user, booking_id)
        return jsonify({"success": True, "data": booking.to_dict()}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to load booking")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@bookings_bp.patch("/<int:booking_id>")
@require_auth
@require_permission("VIEW_BOOKINGS")
def update_booking_route(booking_id: int):
    """Notes, or a status change (operators; customers may cancel)."""
    try:
        booking = booking_service.update_booking(g.current_user, booking_id, request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": booking.to_dict(), "message": "Booking updated"}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to update booking")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@bookings_bp.post("/<int:booking_id>/propose-time")
@require_auth
@require_permission("MANAGE_BOOKINGS")
def propose_time_route(booking_id: int):
    """
    Propose a drop-off slot.

    Body: proposed_start_date (YYYY-MM-DD), proposed_start_time (HH:MM), reason
    """
    try:
        booking = booking_service.propose_time(g.current_user, booking_id, request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": booking.to_dict(), "message": "Time proposed"}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to propose booking time")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@bookings_bp.post("/<int:booking_id>/accept-time")
@require_auth
@require_permission("VIEW_BOOKINGS")
def accept_time_route(booking_id: int):
    try:
        booking = booking_service.accept_proposed_time(g.current_user, booking_id)
        return jsonify({"success": True, "data": booking.to_dict(), "message": "Booking confirmed"}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to accept proposed time")
        return jsonify({"success": False, "error": "Internal server error"}), 500
