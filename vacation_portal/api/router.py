from fastapi import APIRouter

from vacation_portal.api.endpoints import auth, dashboard

page_router = APIRouter()

page_router.include_router(auth.router, tags=["autenticación"])
page_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
