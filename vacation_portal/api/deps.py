from datetime import date
from typing import AsyncGenerator, Callable, Optional
import logging

import httpx
from fastapi import Cookie, Depends
from jose.exceptions import JWTError

from vacation_portal.client.api import ApiClient
from vacation_portal.core.config import settings
from vacation_portal.core.security import get_session_from_token
from vacation_portal.schemas.session import Session


logger = logging.getLogger(__name__)


class SessionRequired(Exception):
    """Raised by dependencies when the request has no valid session cookie."""


def get_api_transport() -> Optional[httpx.AsyncBaseTransport]:
    """
    Transport used to reach the backend.

    None means a regular network transport; tests override this dependency
    to talk to an in-process backend.
    """
    return None


def get_today() -> Callable[[], date]:
    return date.today


async def get_optional_session(
    session_cookie: Optional[str] = Cookie(default=None, alias=settings.SESSION_COOKIE_NAME),
) -> Optional[Session]:
    """
    Read the session from the signed cookie.

    Returns:
        The session, or None if the cookie is missing, expired or tampered with
    """
    if not session_cookie:
        return None
    try:
        return get_session_from_token(session_cookie)
    except JWTError:
        logger.info("Discarding invalid session cookie")
        return None


async def get_current_session(
    session: Optional[Session] = Depends(get_optional_session),
) -> Session:
    """
    Raises:
        SessionRequired: If there is no valid session; handled as a redirect to /login
    """
    if session is None:
        raise SessionRequired()
    return session


async def get_api_client(
    session: Optional[Session] = Depends(get_optional_session),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_api_transport),
) -> AsyncGenerator[ApiClient, None]:
    """
    Backend client bound to the request's session.

    Yields:
        ApiClient: Closed once the request is handled
    """
    async with ApiClient(
        settings.API_URL,
        session=session,
        transport=transport,
        timeout=settings.API_TIMEOUT,
    ) as client:
        yield client
