"""FastAPI dependency injection functions for sessions and database access."""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from iswear_forum.config import settings
from iswear_forum.core.exceptions import ForbiddenError, UnauthorizedError
from iswear_forum.core.permissions import can_moderate, can_post
from iswear_forum.crud import crud_user
from iswear_forum.database import get_db
from iswear_forum.models.user import User
from iswear_forum.services.auth_service import auth_service

logger = logging.getLogger(__name__)


@dataclass
class RequestContext:
    """Everything a handler needs to know about the caller.

    Built once per request and passed explicitly; there is no ambient
    session state. `user` is None for anonymous callers.
    """

    db: Session
    user: Optional[User] = None
    session_token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


def get_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_request_context(
    request: Request,
    db: Session = Depends(get_db),
) -> RequestContext:
    """
    Resolve the session cookie into a request context.

    An invalid or expired cookie yields an anonymous context rather than an
    error; the guards below decide whether anonymity is acceptable.
    """
    token = get_session_token(request)
    if not token:
        return RequestContext(db=db)

    try:
        user = auth_service.get_current_user(db, token)
    except UnauthorizedError as e:
        logger.info(f"[AUTH] Ignoring session cookie: {e.detail}")
        return RequestContext(db=db, session_token=token)

    crud_user.touch_last_seen(db, user_id=user.id)
    return RequestContext(db=db, user=user, session_token=token)


def require_user(ctx: RequestContext = Depends(get_request_context)) -> RequestContext:
    """
    Raises:
        UnauthorizedError: If the request carries no live session
    """
    if not ctx.is_authenticated:
        raise UnauthorizedError("not_authenticated")
    return ctx


def require_poster(ctx: RequestContext = Depends(require_user)) -> RequestContext:
    """Session whose account is approved and not banned."""
    if not can_post(ctx.user):
        logger.info(f"[AUTH] Posting denied for user id={ctx.user.id}, status={ctx.user.status}, banned={ctx.user.is_banned}")
        raise ForbiddenError("posting_not_allowed")
    return ctx


def require_staff(ctx: RequestContext = Depends(require_user)) -> RequestContext:
    """Session owned by a moderator or admin."""
    if not can_moderate(ctx.user.role):
        raise ForbiddenError("staff_only")
    return ctx


__all__ = [
    "RequestContext",
    "get_db",
    "get_session_token",
    "get_request_context",
    "require_user",
    "require_poster",
    "require_staff",
]
