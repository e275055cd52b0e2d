import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

import gripe_logger.config.config as configs
from gripe_logger.client.db.psql import session_scope
from gripe_logger.db.models.auth_session import AuthSession
from gripe_logger.db.models.profile import Profile
from gripe_logger.db.models.user import User
from gripe_logger.db.models.user_role import UserRole
from gripe_logger.model.auth.auth_response import ProfileResponse, SessionResponse
from gripe_logger.model.auth.identity import Identity
from gripe_logger.model.auth.role import Role
from gripe_logger.service.auth.events import AuthChange, AuthEvent, auth_events
from gripe_logger.service.errors import Conflict, Unauthorized

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _normalize_email(email: str) -> str:
    return str(email or "").strip().lower()


def _user_by_email(db: Session, email: str) -> Optional[User]:
    return db.execute(select(User).where(User.email == email)).scalar_one_or_none()


def sign_up(email: str, password: str, name: str) -> ProfileResponse:
    email = _normalize_email(email)
    with session_scope() as db:
        if _user_by_email(db, email) is not None:
            raise Conflict("User already registered")

        user = User(email=email, password_hash=generate_password_hash(password))
        db.add(user)
        try:
            db.flush()
        except IntegrityError as exc:
            # a concurrent sign-up took the email between the check and the insert
            raise Conflict("User already registered") from exc
        profile = Profile(id=user.id, name=name.strip(), email=email)
        db.add(profile)
        db.add(UserRole(user_id=user.id, role=Role.STUDENT.value))
        db.flush()
        logger.info("signed up user=%s", user.id)
        return ProfileResponse.model_validate(profile)


def grant_role(user_id: str, role: Role) -> None:
    with session_scope() as db:
        row = db.execute(select(UserRole).where(UserRole.user_id == user_id)).scalar_one_or_none()
        if row is None:
            db.add(UserRole(user_id=user_id, role=role.value))
        else:
            row.role = role.value
    logger.info("granted role=%s to user=%s", role.value, user_id)


def fetch_role(user_id: str) -> Optional[Role]:
    with session_scope() as db:
        value = db.execute(select(UserRole.role).where(UserRole.user_id == user_id)).scalar_one_or_none()
    return Role(value) if value else None


def get_profile(user_id: str) -> Optional[ProfileResponse]:
    with session_scope() as db:
        profile = db.get(Profile, user_id)
        return ProfileResponse.model_validate(profile) if profile else None


def sign_in(email: str, password: str) -> SessionResponse:
    email = _normalize_email(email)
    with session_scope() as db:
        user = _user_by_email(db, email)
        if user is None or not check_password_hash(user.password_hash, password):
            raise Unauthorized("Invalid login credentials")

        token = secrets.token_urlsafe(32)
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=configs.SESSION_TTL_SECONDS)
        db.add(AuthSession(token=token, user_id=user.id, expires_at=expires_at))
        profile = db.get(Profile, user.id)
        user_id = user.id

    role = fetch_role(user_id)
    identity = Identity(user_id=user_id, email=email, role=role)
    auth_events.publish(AuthChange(AuthEvent.SIGNED_IN, identity, token))
    return SessionResponse(
        access_token=token,
        expires_at=expires_at,
        profile=ProfileResponse.model_validate(profile) if profile else ProfileResponse(id=user_id, name=email, email=email),
        role=role,
    )


def sign_out(token: str) -> bool:
    """Drop the session behind ``token``. An unknown session is not an error; returns whether one existed."""
    if not token:
        return False
    with session_scope() as db:
        session = db.get(AuthSession, token)
        if session is None:
            return False
        user_id = session.user_id
        user = db.get(User, user_id)
        email = user.email if user else ""
        db.delete(session)

    auth_events.publish(AuthChange(AuthEvent.SIGNED_OUT, Identity(user_id=user_id, email=email), token))
    return True


def resolve_token(token: Optional[str]) -> Optional[Identity]:
    if not token:
        return None
    with session_scope() as db:
        session = db.get(AuthSession, token)
        if session is None:
            return None
        if _as_utc(session.expires_at) < datetime.now(timezone.utc):
            db.delete(session)
            return None
        user = db.get(User, session.user_id)
        if user is None:
            return None
        role = db.execute(select(UserRole.role).where(UserRole.user_id == user.id)).scalar_one_or_none()
        return Identity(user_id=user.id, email=user.email, role=Role(role) if role else None)


def seed_admin(email: str, password: str, name: str) -> bool:
    if not email or not password:
        return False
    email = _normalize_email(email)
    with session_scope() as db:
        user = _user_by_email(db, email)
        user_id = user.id if user else None

    if user_id is None:
        user_id = sign_up(email, password, name).id
        logger.info("seeded admin account %s", email)
    grant_role(user_id, Role.ADMIN)
    return True
