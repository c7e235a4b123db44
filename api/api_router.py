# api/api_router.py
from fastapi import APIRouter
from .endpoints.cache import router as cache_router
from .endpoints.health import router as health_router

api_router = APIRouter()
api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(cache_router,  prefix="/cache",  tags=["cache"])
