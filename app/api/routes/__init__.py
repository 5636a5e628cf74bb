# app/api/routes/__init__.py
from fastapi import APIRouter
from .upload import router as upload_router
from .export import router as export_router
from .health import router as health_router
from .review import router as review_router

# Main router that combines all sub-routers
api_router = APIRouter()

# Include all sub-routers with their prefixes
api_router.include_router(upload_router, prefix="/upload", tags=["Test Case Upload"])
api_router.include_router(export_router, prefix="/export", tags=["Test Case Export"])
api_router.include_router(review_router, prefix="/review", tags=["Test Case Review"])
api_router.include_router(health_router, prefix="/health", tags=["Health Checks"])
