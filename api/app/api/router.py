from fastapi import APIRouter

from app.api.routes import companies, health, jobs, me, pages

api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(companies.router, prefix="/companies", tags=["companies"])
api_router.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
api_router.include_router(me.router, prefix="/me", tags=["accounts"])
api_router.include_router(pages.router, tags=["pages"])
