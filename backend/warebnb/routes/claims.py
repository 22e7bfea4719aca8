# Overview: Flask API routes for damage and loss claims.

# backend/warebnb/routes/claims.py
"""
Claims API routes

Lifecycle: submitted -> under-review -> approved | rejected, approved -> paid.
Deleting a claim hides it from listings.
"""

from flask import Blueprint, request, jsonify, current_app, g

from ..services import claim_service
from ..responses import SERVICE_ERRORS, error_response
from ..decorators import require_auth, require_permission


claims_bp = Blueprint("claims", __name__, url_prefix="/api/v1/claims")


@claims_bp.get("")
@require_auth
@require_permission("VIEW_CLAIMS")
def list_claims_route():
    try:
        claims = claim_service.list_claims(
            g.current_user,
            status=request.args.get("status"),
            booking_id=request.args.get("booking_id", type=int),
        )
        return jsonify({"success": True, "data": [c.to_dict() for c in claims]}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to list claims")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@claims_bp.post("")
@require_auth
@require_permission("SUBMIT_CLAIM")
def submit_claim_route():
    """
    Submit a claim against one of the caller's bookings.

    Body: booking_id, type, description, amount_cents, evidence (list)
    """
    try:
        claim = claim_service.submit_claim(g.current_user, request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": claim.to_dict(), "message": "Claim submitted"}), 201

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to submit claim")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@claims_bp.get("/<int:claim_id>")
@require_auth
@require_permission("VIEW_CLAIMS")
def get_claim_route(claim_id: int):
    try:
        claim = claim_service.get_claim(g.current_user, claim_id)
        return jsonify({"success": True, "data": claim.to_dict()}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to load claim")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@claims_bp.post("/<int:claim_id>/start-review")
@require_auth
@require_permission("REVIEW_CLAIMS")
def start_review_route(claim_id: int):
    try:
        claim = claim_service.start_review(g.current_user, claim_id)
        return jsonify({"success": True, "data": claim.to_dict(), "message": "Claim under review"}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to start claim review")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@claims_bp.post("/<int:claim_id>/review")
@require_auth
@require_permission("REVIEW_CLAIMS")
def review_claim_route(claim_id: int):
    """
    Body: decision (approve | reject), approved_amount_cents, resolution

    Requires: REVIEW_CLAIMS permission
    Available to: root, warehouse_admin, warehouse_supervisor
    """
    try:
        claim = claim_service.review_claim(g.current_user, claim_id, request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": claim.to_dict(), "message": f"Claim {claim.status}"}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to review claim")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@claims_bp.post("/<int:claim_id>/pay")
@require_auth
@require_permission("REVIEW_CLAIMS")
def pay_claim_route(claim_id: int):
    try:
        claim = claim_service.process_payment(g.current_user, claim_id)
        return jsonify({"success": True, "data": claim.to_dict(), "message": "Claim paid"}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to pay claim")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@claims_bp.patch("/<int:claim_id>")
@require_auth
@require_permission("EDIT_CLAIMS")
def update_claim_route(claim_id: int):
    try:
        claim = claim_service.update_claim(g.current_user, claim_id, request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": claim.to_dict(), "message": "Claim updated"}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to update claim")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@claims_bp.delete("/<int:claim_id>")
@require_auth
@require_permission("DELETE_CLAIMS")
def delete_claim_route(claim_id: int):
    try:
        claim_service.delete_claim(g.current_user, claim_id)
        return jsonify({"success": True, "message": "Claim deleted"}), 200

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to delete claim")
        return jsonify({"success": False, "error": "Internal server error"}), 500
