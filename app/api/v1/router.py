from fastapi import APIRouter
from app.api.v1.endpoints import admin, pilots, registration, staff, teams

api_router = APIRouter()

api_router.include_router(teams.router, prefix="/teams", tags=["teams"])
api_router.include_router(pilots.router, prefix="/pilots", tags=["pilots"])
api_router.include_router(staff.router, prefix="/staff", tags=["staff"])
api_router.include_router(registration.router, prefix="/registration-settings", tags=["registration"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
