"""Aggregate all API sub-routers."""

from fastapi import APIRouter

from charity_api.api.admin import router as admin_router
from charity_api.api.auth import router as auth_router
from charity_api.api.contacts import router as contacts_router
from charity_api.api.donations import router as donations_router
from charity_api.api.events import router as events_router
from charity_api.api.health import router as health_router
from charity_api.api.media import router as media_router
from charity_api.api.newsletters import router as newsletters_router
from charity_api.api.projects import router as projects_router
from charity_api.api.volunteers import router as volunteers_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(donations_router, prefix="/donations", tags=["donations"])
api_router.include_router(projects_router, prefix="/projects", tags=["projects"])
api_router.include_router(media_router, prefix="/media", tags=["media"])
api_router.include_router(contacts_router, prefix="/contacts", tags=["contacts"])
api_router.include_router(newsletters_router, prefix="/newsletters", tags=["newsletters"])
api_router.include_router(events_router, prefix="/events", tags=["events"])
api_router.include_router(volunteers_router, prefix="/volunteers", tags=["volunteers"])
api_router.include_router(admin_router, prefix="/admin", tags=["admin"])
