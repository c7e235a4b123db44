# api/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .api_router import api_router
from chronolens.core.cache import get_events_cache
from chronolens.core.logger import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="ChronoLens API", version="0.1.0")

# Add CORS middleware to allow cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, replace with specific origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")

@app.on_event("startup")
async def _startup():
    cache = app.dependency_overrides.get(get_events_cache, get_events_cache)()
    removed = await cache.cleanup_expired()
    logger.info(f"Events cache ready ({cache.backend.name}), removed {removed} expired entries.")

@app.get("/healthz")
async def healthz():
    return {"ok": True}
