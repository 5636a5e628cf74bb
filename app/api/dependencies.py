# app/api/dependencies.py

from app.services.health import HealthChecker
from app.services.ingestion import IngestionService, create_ingestion_service
from app.services.review import ReviewService, create_review_service

async def get_ingestion_service() -> IngestionService:
    """
    Dependency for getting the CSV ingestion service.

    Returns:
        IngestionService: Service configured from application settings
    """
    return create_ingestion_service()

async def get_health_checker() -> HealthChecker:
    """
    Dependency for getting health checker instance.

    Returns:
        HealthChecker: Instance of health checker service
    """
    return HealthChecker()

async def get_review_service() -> ReviewService:
    """
    Dependency for getting the review service.

    Returns:
        ReviewService: Service storing screenshots under the configured directory
    """
    return create_review_service()
