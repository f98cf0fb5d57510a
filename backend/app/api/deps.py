"""
Request-level authentication and authorization dependencies.

Bearer tokens are the canonical credential. The cookie session set at login
is only consulted by ``get_session_user`` (legacy ``/api/session`` shim).
"""

import logging
from typing import Callable, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from app.core.errors import AuthenticationError, AuthorizationError
from app.core.security import TokenError, decode_access_token
from app.db.session import get_db
from app.models import User
from app.services.dashboard import DashboardService

logger = logging.getLogger("healthinfo.auth")

SESSION_USER_KEY = "user_id"


def get_current_claims(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> dict:
    """
    Authenticate the request from its ``Authorization: Bearer <token>`` header.

    No header is a 401. A header whose token fails verification is a 403,
    whatever the reason (malformed, expired, bad signature). On success the
    claims are attached to ``request.state.user``. The credential store is
    never queried here.
    """
    if not authorization:
        raise AuthenticationError(headers={"WWW-Authenticate": "Bearer"})

    parts = authorization.split(" ")
    token = parts[1] if len(parts) > 1 else ""

    try:
        claims = decode_access_token(token)
    except TokenError as exc:
        logger.info("Rejected bearer token (%s)", type(exc).__name__)
        raise AuthorizationError() from exc

    request.state.user = claims
    return claims


def require_roles(*roles: str) -> Callable[..., dict]:
    """
    Build a dependency that only lets the given roles through.

    Authentication always runs first; an authenticated caller whose role is
    not in ``roles`` gets a 403.
    """
    allowed = frozenset(roles)

    def role_gate(claims: dict = Depends(get_current_claims)) -> dict:
        if claims.get("role") not in allowed:
            raise AuthorizationError("Forbidden: Insufficient permissions")
        return claims

    return role_gate


def get_session_user(request: Request, db: Session = Depends(get_db)) -> User:
    """Resolve the cookie session to a stored user, or 401."""
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        raise AuthenticationError()

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        # Stale cookie for a user that no longer resolves
        request.session.clear()
        raise AuthenticationError()
    return user


def get_dashboard_service(request: Request) -> DashboardService:
    """The process-wide dashboard service created at startup."""
    return request.app.state.dashboard
