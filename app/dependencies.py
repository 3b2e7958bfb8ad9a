import logging
from typing import Optional

from fastapi import Depends, Request

from app.core.config import get_settings, Settings
from app.jwt.cookies import SessionCookie
from app.jwt.token_service import IdentityClaim, TokenService
from app.utils.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


def get_token_service(
    settings: Settings = Depends(get_settings)
) -> TokenService:
    """
    TokenService dependency
    - secret, algorithm and lifetime come from settings
    """
    return TokenService(
        secret_key=settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        ttl_seconds=settings.SESSION_TTL_SECONDS,
    )


def get_session_cookie(
    settings: Settings = Depends(get_settings)
) -> SessionCookie:
    return SessionCookie(settings)


def get_current_identity(
    request: Request,
    token_service: TokenService = Depends(get_token_service),
    cookie: SessionCookie = Depends(get_session_cookie),
) -> IdentityClaim:
    """
    Authentication gate for protected routes
    1) read the session cookie
    2) verify it with the TokenService
    3) keep the decoded claim on request.state and hand it to the handler
    Raises:
        UnauthorizedError if the cookie is missing or the token is invalid/expired
    """
    token = cookie.read(request.cookies)
    if not token:
        raise UnauthorizedError("Not Authorized")

    identity = token_service.verify(token)
    request.state.identity = identity
    return identity


def get_optional_identity(
    request: Request,
    token_service: TokenService = Depends(get_token_service),
    cookie: SessionCookie = Depends(get_session_cookie),
) -> Optional[IdentityClaim]:
    """
    Optional-auth variant
    - a valid token widens what the route returns, anything else yields None
    """
    try:
        return get_current_identity(request, token_service, cookie)
    except UnauthorizedError:
        request.state.identity = None
        return None
