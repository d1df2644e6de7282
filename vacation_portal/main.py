""" Main file for the dashboard application """
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from vacation_portal.api.deps import SessionRequired
from vacation_portal.api.router import page_router
from vacation_portal.core.config import settings
from vacation_portal.core.logging import setup_logging, get_logger

# Configure the logging system
setup_logging(log_level=settings.LOG_LEVEL)
logger = get_logger(__name__)


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    docs_url="/docs"
)

# Configure CORS
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(SessionRequired)
async def redirect_to_login(request: Request, exc: SessionRequired):
    """Unauthenticated access to the dashboard goes back to the login page."""
    logger.debug(f"No session for {request.url.path}, redirecting to login")
    return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)


logger.info(f"Iniciando aplicación: {settings.PROJECT_NAME} v{settings.VERSION} (backend: {settings.API_URL})")

app.include_router(page_router)

@app.get("/ping", summary="Check if the dashboard is running")
def pong():
    """Sanity check endpoint."""
    logger.debug("Petición de ping recibida")
    return {"ping": "pong!"}
