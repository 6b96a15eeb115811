"""Authentication endpoints."""

from fastapi import APIRouter, Depends, Response, status

from iswear_forum.api.deps import RequestContext, get_request_context, require_user
from iswear_forum.config import settings
from iswear_forum.models.user import User
from iswear_forum.schemas.common import MessageResponse
from iswear_forum.schemas.user import CurrentUserResponse, LoginRequest, RegisterRequest
from iswear_forum.services.auth_service import auth_service
from iswear_forum.services.views import safe_user

router = APIRouter(tags=["Authentication"])


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_MAX_AGE_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )


def _current_user_response(user: User) -> CurrentUserResponse:
    return CurrentUserResponse(
        **safe_user(user).model_dump(),
        session_state=auth_service.session_state(user),
    )


@router.post(
    "/register",
    response_model=CurrentUserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="""
    Create an account in PENDING status and log it in.

    **Access:** Public
    """,
)
def register(
    payload: RegisterRequest,
    response: Response,
    ctx: RequestContext = Depends(get_request_context),
) -> CurrentUserResponse:
    user, token = auth_service.register(ctx.db, payload)
    _set_session_cookie(response, token)
    return _current_user_response(user)


@router.post(
    "/login",
    response_model=CurrentUserResponse,
    summary="Login user",
)
def login(
    payload: LoginRequest,
    response: Response,
    ctx: RequestContext = Depends(get_request_context),
) -> CurrentUserResponse:
    """Check credentials and start a session. A pending account still logs in."""
    user, token = auth_service.login(
        ctx.db, payload.username, payload.password, previous_token=ctx.session_token
    )
    _set_session_cookie(response, token)
    return _current_user_response(user)


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Logout user",
)
def logout(
    response: Response,
    ctx: RequestContext = Depends(get_request_context),
) -> MessageResponse:
    """End the session. Calling it without a session is not an error."""
    auth_service.logout(ctx.db, ctx.session_token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    return MessageResponse(message="logged_out")


@router.get(
    "/user",
    response_model=CurrentUserResponse,
    summary="Get current user",
)
def get_current_user(
    ctx: RequestContext = Depends(require_user),
) -> CurrentUserResponse:
    return _current_user_response(ctx.user)
