# Overview: Service-layer operations for auth; encapsulates business logic and database work.

"""
Authentication Service

Uses bcrypt for password hashing and validates password strength.

SECURITY NOTES:
- Passwords hashed with bcrypt (cost factor 12)
- Minimum 8 characters required
- Must contain uppercase, lowercase, digit, and special char
- Session tokens managed separately (see session_service.py)
"""

import bcrypt
import re
from flask import current_app

from ..extensions import db
from ..models import Company, Profile
from ..permissions.roles import DEFAULT_ROLE
from ..validation import ConflictError, ValidationError
from .role_service import canonical_role
from warebnb.time_utils import utcnow


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class PasswordValidationError(Exception):
    """Raised when password doesn't meet strength requirements."""
    pass


def validate_password_strength(password: str) -> None:
    """
    Validate password meets strength requirements.

    Requirements:
    - Minimum 8 characters
    - At least one uppercase letter
    - At least one lowercase letter
    - At least one digit
    - At least one special character (!@#$%^&*(),.'":{}|<>)

    Raises PasswordValidationError if requirements not met.
    """
    if len(password) < 8:
        raise PasswordValidationError("Password must be at least 8 characters long")

    if not re.search(r'[A-Z]', password):
        raise PasswordValidationError("Password must contain at least one uppercase letter")

    if not re.search(r'[a-z]', password):
        raise PasswordValidationError("Password must contain at least one lowercase letter")

    if not re.search(r'\d', password):
        raise PasswordValidationError("Password must contain at least one digit")

    if not re.search(r"[!@#$%^&*(),.'\":{}|<>]", password):
        raise PasswordValidationError("Password must contain at least one special character")


def hash_password(password: str) -> str:
    """
    Hash password using bcrypt (cost factor BCRYPT_ROUNDS, 12 by default).
    Password is validated for strength before hashing.
    """
    validate_password_strength(password)
    salt = bcrypt.gensalt(rounds=current_app.config.get("BCRYPT_ROUNDS", 12))
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """Verify password against bcrypt hash (timing-safe)."""
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        # Malformed hash
        return False


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def create_profile(
    email: str,
    password: str,
    name: str | None = None,
    role: str = DEFAULT_ROLE,
    company_id: int | None = None,
    phone: str | None = None,
    membership_tier: str = "bronze",
) -> Profile:
    """
    Create a profile with a bcrypt password hash.

    Raises:
        ValidationError: malformed email, unknown role or company
        ConflictError: email already registered
        PasswordValidationError: weak password
    """
    email = normalize_email(email)
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("A valid email is required")

    canonical = canonical_role(role)
    if canonical is None:
        raise ValidationError(f"Unknown role: {role}")

    if company_id is not None and not db.session.get(Company, company_id):
        raise ValidationError("Company not found")

    existing = db.session.query(Profile).filter_by(email=email).first()
    if existing:
        raise ConflictError("An account with this email already exists")

    profile = Profile(
        email=email,
        name=(name or "").strip() or None,
        phone=phone,
        role=canonical,
        company_id=company_id,
        membership_tier=membership_tier,
        password_hash=hash_password(password),
    )

    db.session.add(profile)
    db.session.commit()
    return profile


def authenticate(email: str, password: str) -> Profile | None:
    """
    Authenticate a profile by email and password.

    Returns the Profile if credentials are valid, None otherwise.
    Updates last_login_at on success.
    """
    profile = db.session.query(Profile).filter(
        Profile.email == normalize_email(email),
        Profile.is_active.is_(True),
    ).first()

    if not profile:
        return None

    if verify_password(password, profile.password_hash):
        profile.last_login_at = utcnow()
        db.session.commit()
        return profile

    return None
