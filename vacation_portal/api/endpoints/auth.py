from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse

from vacation_portal.api.deps import get_api_client, get_optional_session
from vacation_portal.client.api import ApiClient
from vacation_portal.client.exceptions import ApiError
from vacation_portal.core.config import settings
from vacation_portal.core.logging import get_logger
from vacation_portal.core.security import create_session_token
from vacation_portal.schemas.session import LoginRequest, Session

router = APIRouter()
logger = get_logger(__name__)


@router.get("/login")
async def login_page(
    session: Optional[Session] = Depends(get_optional_session),
) -> Any:
    """
    Login page.

    Already authenticated visitors are sent straight to the dashboard.
    """
    if session is not None:
        return RedirectResponse("/dashboard", status_code=status.HTTP_303_SEE_OTHER)
    return {"page": "login", "fields": ["email", "password"]}


@router.post("/login")
async def login(
    credentials: LoginRequest,
    api: ApiClient = Depends(get_api_client),
) -> Any:
    """
    Log in against the backend and keep the session in a signed cookie.

    Args:
        credentials: Email and password
        api: Backend client

    Returns:
        Redirect to the dashboard

    Raises:
        HTTPException: If the backend rejects the login, whatever the reason
    """
    try:
        session = await api.login(credentials)
    except ApiError:
        logger.info(f"Login rejected for {credentials.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials. Please try again.",
        )

    response = RedirectResponse("/dashboard", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_session_token(session),
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return response


@router.post("/logout")
async def logout(
    session: Optional[Session] = Depends(get_optional_session),
) -> Any:
    """Forget the session and go back to the login page."""
    if session is not None:
        logger.info(f"Logout for {session.email}")
    response = RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response
