"""Async client for the vacation backend HTTP API."""
import copy
from typing import Any, List, Optional

import httpx
from pydantic import TypeAdapter

from vacation_portal.client.exceptions import ApiError, NotAuthenticatedError, extract_flags
from vacation_portal.core.logging import get_logger
from vacation_portal.schemas.session import LoginRequest, Session
from vacation_portal.schemas.user import User, UserCreate
from vacation_portal.schemas.vacation_request import VacationRequest, VacationRequestCreate

logger = get_logger(__name__)

_users_adapter = TypeAdapter(List[User])
_vacations_adapter = TypeAdapter(List[VacationRequest])


class ApiClient:
    """
    One coroutine per backend operation.

    The session is injected at construction; authenticated calls send it as
    a bearer token. There is no caching, retrying or deduplication: every
    call is exactly one HTTP request with exactly one outcome.

    Usage:
        async with ApiClient(settings.API_URL) as api:
            session = await api.login(LoginRequest(email=..., password=...))
        async with ApiClient(settings.API_URL, session=session) as api:
            vacations = await api.get_vacations()
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[Session] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
            timeout=timeout,
        )
        self._owns_client = True

    def with_session(self, session: Optional[Session]) -> "ApiClient":
        """
        Return a client bound to `session` on the same backend.

        The derived client borrows this one's connection pool: closing it
        leaves the pool open, which stays owned by the original client.
        """
        derived = copy.copy(self)
        derived.session = session
        derived._owns_client = False
        return derived

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _auth_headers(self) -> dict[str, str]:
        if self.session is None:
            raise NotAuthenticatedError()
        return self.session.authorization_header

    async def _request(
        self,
        method: str,
        path: str,
        failure_message: str,
        *,
        json: Any = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """
        Send one request and raise ApiError on any non-success outcome.

        Args:
            method: HTTP method
            path: Path relative to the backend base URL
            failure_message: Generic message used when the call fails
            json: Optional JSON body
            authenticated: Whether to attach the bearer token

        Returns:
            The successful response

        Raises:
            ApiError: On transport errors and non-2xx statuses
        """
        headers = self._auth_headers() if authenticated else {}
        try:
            response = await self._client.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.error(
                f"{method} {path} failed: {str(e)}",
                extra={"data": {"method": method, "path": path}}
            )
            raise ApiError(failure_message) from e

        if response.is_success:
            logger.debug(f"{method} {path} -> {response.status_code}")
            return response

        try:
            body = response.json()
        except ValueError:
            body = None
        flags = extract_flags(body)
        logger.warning(
            f"{method} {path} -> {response.status_code}",
            extra={"data": {"method": method, "path": path, "status": response.status_code, "flags": flags}}
        )
        raise ApiError(failure_message, status_code=response.status_code, flags=flags)

    async def login(self, credentials: LoginRequest) -> Session:
        """
        Authenticate against POST /auth/login.

        Any failure is reported as invalid credentials; wrong passwords are
        not told apart from other errors.
        """
        response = await self._request(
            "POST",
            "/auth/login",
            "Invalid credentials",
            json=credentials.model_dump(),
            authenticated=False,
        )
        session = Session.model_validate(response.json())
        logger.info(f"Login succeeded for {session.email} ({session.role.value})")
        return session

    async def get_users(self) -> List[User]:
        response = await self._request("GET", "/users", "Failed to fetch users")
        return _users_adapter.validate_python(response.json())

    async def create_user(self, fields: UserCreate) -> User:
        response = await self._request(
            "POST",
            "/users",
            "Failed to create user",
            json=fields.model_dump(mode="json", by_alias=True),
        )
        return User.model_validate(response.json())

    async def delete_user(self, user_id: int) -> None:
        await self._request("DELETE", f"/users/{user_id}", "Failed to delete user")

    async def get_vacations(self) -> List[VacationRequest]:
        response = await self._request("GET", "/vacations", "Failed to fetch vacations")
        return _vacations_adapter.validate_python(response.json())

    async def create_vacation(self, fields: VacationRequestCreate) -> VacationRequest:
        response = await self._request(
            "POST",
            "/vacations",
            "Failed to create vacation",
            json=fields.model_dump(mode="json", by_alias=True),
        )
        return VacationRequest.model_validate(response.json())

    async def approve_vacation(self, vacation_id: int) -> VacationRequest:
        response = await self._request(
            "PUT", f"/vacations/{vacation_id}/approve", "Failed to approve vacation"
        )
        return VacationRequest.model_validate(response.json())

    async def reject_vacation(self, vacation_id: int) -> VacationRequest:
        response = await self._request(
            "PUT", f"/vacations/{vacation_id}/reject", "Failed to reject vacation"
        )
        return VacationRequest.model_validate(response.json())

    async def delete_vacation(self, vacation_id: int) -> None:
        await self._request("DELETE", f"/vacations/{vacation_id}", "Failed to delete vacation")
