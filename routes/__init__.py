from fastapi import APIRouter
from .products import router as products_router, PRODUCTS_PATH
from .health import router as health_router, diagnostic_payload
from .deps import ApplicationDependencies

# Create main API router
api_router = APIRouter()

# Include all route modules
api_router.include_router(products_router, tags=["Products"])
api_router.include_router(health_router, tags=["Health"])

__all__ = ["api_router", "ApplicationDependencies", "PRODUCTS_PATH", "diagnostic_payload"]
