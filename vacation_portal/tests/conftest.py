import os
from typing import AsyncGenerator, Dict

import pytest
from httpx import ASGITransport, AsyncClient

from vacation_portal.api.deps import get_api_transport
from vacation_portal.client.api import ApiClient
from vacation_portal.core.logging import setup_logging
from vacation_portal.main import app
from vacation_portal.schemas.session import Session
from vacation_portal.tests.fake_backend import BASE_URL, FakeBackend
from vacation_portal.tests.utils.utils import session_cookie_headers


@pytest.fixture(autouse=True)
def configure_logging():
    """Configura el nivel de logging para todos los tests"""
    # Obtener el nivel de log de la variable de entorno o usar 'error' por defecto
    log_level = os.getenv("TEST_LOG_LEVEL", "error")
    setup_logging(log_level)
    return None


@pytest.fixture
def backend() -> FakeBackend:
    """Backend en memoria con admin, manager y colaborador sembrados."""
    return FakeBackend()


@pytest.fixture
def backend_transport(backend: FakeBackend) -> ASGITransport:
    return ASGITransport(app=backend.app)


@pytest.fixture
async def api(backend_transport: ASGITransport) -> AsyncGenerator[ApiClient, None]:
    """Cliente sin sesión, solo válido para el login."""
    async with ApiClient(BASE_URL, transport=backend_transport) as client:
        yield client


@pytest.fixture
def admin_session(backend: FakeBackend) -> Session:
    return backend.session_for(backend.admin["id"])


@pytest.fixture
def manager_session(backend: FakeBackend) -> Session:
    return backend.session_for(backend.manager["id"])


@pytest.fixture
def collaborator_session(backend: FakeBackend) -> Session:
    return backend.session_for(backend.collaborator["id"])


@pytest.fixture
async def admin_api(backend_transport, admin_session) -> AsyncGenerator[ApiClient, None]:
    async with ApiClient(BASE_URL, session=admin_session, transport=backend_transport) as client:
        yield client


@pytest.fixture
async def manager_api(backend_transport, manager_session) -> AsyncGenerator[ApiClient, None]:
    async with ApiClient(BASE_URL, session=manager_session, transport=backend_transport) as client:
        yield client


@pytest.fixture
async def collaborator_api(backend_transport, collaborator_session) -> AsyncGenerator[ApiClient, None]:
    async with ApiClient(BASE_URL, session=collaborator_session, transport=backend_transport) as client:
        yield client


@pytest.fixture
async def client(backend_transport: ASGITransport) -> AsyncGenerator[AsyncClient, None]:
    """Cliente HTTP del dashboard, con el backend sustituido por el falso."""
    app.dependency_overrides[get_api_transport] = lambda: backend_transport

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def admin_cookie_headers(admin_session: Session) -> Dict[str, str]:
    return session_cookie_headers(admin_session)


@pytest.fixture
def manager_cookie_headers(manager_session: Session) -> Dict[str, str]:
    return session_cookie_headers(manager_session)


@pytest.fixture
def collaborator_cookie_headers(collaborator_session: Session) -> Dict[str, str]:
    return session_cookie_headers(collaborator_session)
