from fastapi import APIRouter

from eventradar.api.v1 import events, categories, location

# Initialize API router
api_router = APIRouter()

# Include routers from different modules
api_router.include_router(events.router, prefix="/events", tags=["Events"])
api_router.include_router(categories.router, prefix="/categories", tags=["Categories"])
api_router.include_router(location.router, prefix="/location", tags=["Location"])
