from fastapi import APIRouter

from src.api.agents.router import router as agents_router
from src.api.areas_of_interest.router import router as areas_of_interest_router
from src.api.bids.router import router as bids_router
from src.api.coverage_areas.router import router as coverage_areas_router
from src.api.health.router import router as health_router
from src.api.provider_profiles.router import router as provider_profiles_router
from src.api.ratings.router import router as ratings_router
from src.api.requests.router import router as requests_router
from src.api.users.router import router as users_router

# Marketplace API router
marketplace_router = APIRouter(prefix="/api")

# Include domain routers
marketplace_router.include_router(agents_router)
marketplace_router.include_router(areas_of_interest_router)
marketplace_router.include_router(bids_router)
marketplace_router.include_router(coverage_areas_router)
marketplace_router.include_router(provider_profiles_router)
marketplace_router.include_router(ratings_router)
marketplace_router.include_router(requests_router)
marketplace_router.include_router(users_router)

# Main API router
api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(marketplace_router)
