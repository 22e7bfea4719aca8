# Overview: Flask API routes for auth operations; parses input and returns JSON responses.

# backend/warebnb/routes/auth.py
"""
Authentication API routes

- Self-registration creates a warehouse_client profile
- Login returns a bearer token
- Logout revokes the token and forgets any root preview role
"""

from flask import Blueprint, request, jsonify, current_app, g, session

from ..services import auth_service
from ..services import session_service
from ..services import permission_service
from ..services import role_service
from ..services.profile_service import serialize_profile
from ..responses import SERVICE_ERRORS, error_response
from ..decorators import require_auth


auth_bp = Blueprint("auth", __name__, url_prefix="/api/v1/auth")


@auth_bp.post("/register")
def register_route():
    """Create a client profile. Role and company are never taken from the request."""
    try:
        data = request.get_json(silent=True) or {}
        email = data.get("email")
        password = data.get("password")

        if not all([email, password]):
            return jsonify({"success": False, "error": "email and password required"}), 400

        profile = auth_service.create_profile(
            email=email,
            password=password,
            name=data.get("name"),
            phone=data.get("phone"),
        )

        permission_service.log_security_event(
            profile_id=profile.id,
            event_type="PROFILE_REGISTERED",
            success=True,
            ip_address=request.remote_addr,
            user_agent=request.headers.get("User-Agent"),
        )

        return jsonify({
            "success": True,
            "data": serialize_profile(profile),
            "message": "Account created",
        }), 201

    except SERVICE_ERRORS as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to register profile")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@auth_bp.post("/login")
def login_route():
    """
    Authenticate and create a session token.

    The token must be sent as "Authorization: Bearer <token>".
    """
    try:
        data = request.get_json(silent=True) or {}
        email = data.get("email")
        password = data.get("password")

        if not all([email, password]):
            return jsonify({"success": False, "error": "email and password required"}), 400

        user_agent = request.headers.get("User-Agent")
        ip_address = request.remote_addr

        profile = auth_service.authenticate(email, password)

        if not profile:
            permission_service.log_security_event(
                profile_id=None,
                event_type="LOGIN_FAILED",
                success=False,
                reason=f"Invalid credentials for {auth_service.normalize_email(email)}",
                ip_address=ip_address,
                user_agent=user_agent,
            )
            return jsonify({"success": False, "error": "Invalid credentials"}), 401

        session_record, token = session_service.create_session(
            profile_id=profile.id,
            user_agent=user_agent,
            ip_address=ip_address
        )
        permission_service.log_security_event(
            profile_id=profile.id,
            event_type="LOGIN",
            success=True,
            ip_address=ip_address,
            user_agent=user_agent,
            company_id=profile.company_id,
        )

        role = role_service.profile_role(profile)
        return jsonify({
            "success": True,
            "data": {
                "profile": serialize_profile(profile),
                "role": role,
                "permissions": sorted(permission_service.get_profile_permissions(profile)),
                "token": token,
                "session": session_record.to_dict(),
                "redirect": role_service.landing_path(role),
            },
            "message": "Login successful"
        }), 200

    except Exception:
        current_app.logger.exception("Failed to login profile")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@auth_bp.post("/logout")
@require_auth
def logout_route():
    """Revoke the session token and clear the root preview role."""
    try:
        token = request.headers.get("Authorization").split(" ", 1)[1]
        session_service.revoke_session(token, reason="User logout")
        role_service.clear_test_role(g.current_user, session)

        permission_service.log_security_event(
            profile_id=g.current_user.id,
            event_type="LOGOUT",
            success=True,
            ip_address=request.remote_addr,
            user_agent=request.headers.get("User-Agent"),
            company_id=g.current_user.company_id,
        )

        response = jsonify({"success": True, "message": "Logout successful"})
        response.delete_cookie(role_service.TEST_ROLE_COOKIE, path="/")
        return response, 200

    except Exception:
        current_app.logger.exception("Failed to logout profile")
        return jsonify({"success": False, "error": "Internal server error"}), 500


@auth_bp.post("/validate")
@require_auth
def validate_route():
    """Return the profile, its canonical role and permissions for a valid token."""
    profile = g.current_user
    return jsonify({
        "success": True,
        "data": {
            "profile": serialize_profile(profile),
            "role": role_service.profile_role(profile),
            "permissions": sorted(permission_service.get_profile_permissions(profile)),
        },
    }), 200
