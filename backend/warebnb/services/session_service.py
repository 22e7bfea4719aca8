# Overview: Bearer session tokens for dashboard logins.

"""
Login sessions

A login hands the browser a random bearer token; only its SHA-256 digest
is stored. A token stops working after 24 hours, after 2 hours without a
request, or once it is revoked at logout. Revoked and expired rows are
purged by `flask warebnb cleanup-sessions`.
"""

import hashlib
import secrets
from dataclasses import dataclass
from datetime import timedelta

from ..extensions import db
from ..models import Profile, SessionToken
from warebnb.time_utils import utcnow


SESSION_ABSOLUTE_TIMEOUT = timedelta(hours=24)
SESSION_IDLE_TIMEOUT = timedelta(hours=2)
TOKEN_BYTES = 32


@dataclass
class SessionContext:
    profile: Profile
    session: SessionToken


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def _live_record(token: str) -> SessionToken | None:
    return db.session.query(SessionToken).filter_by(
        token_hash=hash_token(token),
        is_revoked=False,
    ).first()


def _revoke(record: SessionToken, reason: str | None) -> None:
    record.is_revoked = True
    record.revoked_at = utcnow()
    record.revoked_reason = reason
    db.session.commit()


def create_session(
    profile_id: int,
    user_agent: str | None = None,
    ip_address: str | None = None,
) -> tuple[SessionToken, str]:
    """
    Open a session for an active profile.

    Returns the stored record and the plaintext token; the plaintext is
    only ever returned to the caller here.
    """
    profile = db.session.get(Profile, profile_id)
    if profile is None or not profile.is_active:
        raise ValueError("Profile cannot sign in")

    token = secrets.token_hex(TOKEN_BYTES)
    started = utcnow()
    record = SessionToken(
        profile_id=profile.id,
        token_hash=hash_token(token),
        created_at=started,
        last_used_at=started,
        expires_at=started + SESSION_ABSOLUTE_TIMEOUT,
        user_agent=user_agent,
        ip_address=ip_address,
        is_revoked=False,
    )
    db.session.add(record)
    db.session.commit()
    return record, token


def validate_session(token: str) -> SessionContext | None:
    """
    Resolve a bearer token to its profile, or None.

    An idle token is revoked on the spot so it cannot be revived. A
    deactivated profile is refused even with a live token.
    """
    record = _live_record(token)
    if record is None:
        return None

    now = utcnow()
    if record.expires_at < now:
        return None
    if now - record.last_used_at > SESSION_IDLE_TIMEOUT:
        _revoke(record, "Idle timeout")
        return None

    profile = db.session.get(Profile, record.profile_id)
    if profile is None or not profile.is_active:
        return None

    record.last_used_at = now
    db.session.commit()
    return SessionContext(profile=profile, session=record)


def revoke_session(token: str, reason: str | None = None) -> bool:
    record = _live_record(token)
    if record is None:
        return False
    _revoke(record, reason)
    return True


def cleanup_expired_sessions() -> int:
    """Delete expired rows and rows revoked more than a day ago. Returns the count."""
    now = utcnow()
    deleted = db.session.query(SessionToken).filter(
        db.or_(
            SessionToken.expires_at < now,
            db.and_(
                SessionToken.is_revoked.is_(True),
                SessionToken.revoked_at < now - SESSION_ABSOLUTE_TIMEOUT,
            ),
        )
    ).delete(synchronize_session=False)
    db.session.commit()
    return deleted
