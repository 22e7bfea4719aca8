# Overview: Flask API routes for invoices.

from flask import Blueprint, request, jsonify, current_app, g

from ..services import invoice_service
from ..validation import ValidationError, parse_int_field
from ..responses import SERVICE_ERRORS, error_response
from ..decorators import require_auth, require_permission


invoices_bp = Blueprint("invoices", __name__, url_prefix="/api/v1/invoices")


@invoices_bp.get("")
@require_auth
@require_permission("VIEW_INVOICES")
def list_invoices_route():
    try:
        invoices = invoice_service.list_invoices(g.current_user, status=request.args.get("status"))
        return jsonify({"success": True, "data": [i.to_dict() for i in invoices]}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to list invoices")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@invoices_bp.get("/<int:invoice_id>")
@require_auth
@require_permission("VIEW_INVOICES")
def get_invoice_route(invoice_id: int):
    try:
        invoice = invoice_service.get_invoice(g.current_user, invoice_id)
        return jsonify({"success": True, "data": invoice.to_dict()}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to load invoice")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@invoices_bp.post("/generate")
@require_auth
@require_permission("MANAGE_INVOICES")
def generate_invoice_route():
    """
    Generate a pending invoice.

    Body: exactly one of booking_id or service_order_id
    Requires: MANAGE_INVOICES permission
    """
    try:
        data = request.get_json(silent=True) or {}
        booking_id = data.get("booking_id")
        order_id = data.get("service_order_id")

        if (booking_id is None) == (order_id is None):
            raise ValidationError("Provide exactly one of booking_id or service_order_id")

        if booking_id is not None:
            invoice = invoice_service.generate_booking_invoice(
                g.current_user, parse_int_field(booking_id, "booking_id")
            )
        else:
            invoice = invoice_service.generate_order_invoice(
                g.current_user, parse_int_field(order_id, "service_order_id")
            )

        return jsonify({"success": True, "data": invoice.to_dict(), "message": "Invoice generated"}), 201

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to generate invoice")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@invoices_bp.patch("/<int:invoice_id>")
@require_auth
@require_permission("MANAGE_INVOICES")
def update_invoice_route(invoice_id: int):
    try:
        invoice = invoice_service.update_invoice(g.current_user, invoice_id, request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": invoice.to_dict(), "message": "Invoice updated"}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to update invoice")
        return jsonify({"success": False, "error": "Internal server error"}), 500
