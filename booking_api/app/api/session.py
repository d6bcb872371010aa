"""
Session endpoints.

``POST /jwt-auth`` signs whatever identity object the client posts and
returns it in an HTTP-only cookie.  ``GET /session`` echoes the claims
of a valid cookie and ``POST /logout`` expires the cookie.  These
routes live at the root of the application, outside ``/api/v1``.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request, Response

from booking_api.app.core.security import TokenService, get_token_service, require_session
from booking_api.app.schemas.session import SessionAck


router = APIRouter()


def _cookie_options(request: Request) -> Dict[str, Any]:
    settings = request.app.state.settings
    return {
        "httponly": True,
        "secure": settings.cookie_secure,
        "samesite": settings.cookie_samesite,
    }


@router.post("/jwt-auth", response_model=SessionAck)
def issue_token(
    request: Request,
    response: Response,
    identity: Dict[str, Any] = Body(..., description="Claims to embed in the session token"),
    tokens: TokenService = Depends(get_token_service),
) -> SessionAck:
    """Issue a session token and set it as a cookie.

    The body is not checked against any user database; it is signed as
    is and becomes the claims returned by ``GET /session``.
    """
    token = tokens.issue(identity)
    response.set_cookie(
        request.app.state.settings.cookie_name,
        token,
        max_age=tokens.lifetime_seconds,
        **_cookie_options(request),
    )
    return SessionAck(success=True)


@router.get("/session")
def read_session(claims: Dict[str, Any] = Depends(require_session)) -> Dict[str, Any]:
    """Return the claims of the presented session cookie."""
    return claims


@router.post("/logout", response_model=SessionAck)
def logout(request: Request, response: Response) -> SessionAck:
    response.delete_cookie(request.app.state.settings.cookie_name, **_cookie_options(request))
    return SessionAck(success=True)
