from fastapi import APIRouter, Depends

import schemas
from config import Settings
from .deps import get_settings

API_VERSION = "1.0.0"

router = APIRouter(tags=["Health"])


def diagnostic_payload(settings: Settings) -> dict:
    """Report which credentials are present without contacting either store."""
    return {
        "status": "ok",
        "message": "API is working",
        "env": {
            "hasPostgres": settings.has_database,
            "hasBlob": settings.has_blob,
        }
    }


@router.get("/")
async def root():
    """Health check endpoint"""
    return {
        "status": "online",
        "message": "Products API is running",
        "version": API_VERSION
    }


@router.get("/health", response_model=schemas.PingResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    """Deployment health check"""
    return diagnostic_payload(settings)
