# app/api/routes/export.py

from fastapi import APIRouter
from fastapi.responses import Response

from app.domain.models import TestCaseStatus
from app.schemas.requests import ExportRequest
from app.services.exporter import EXPORT_FILENAME, export_approved_csv
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()

@router.post(
    "",
    response_class=Response,
    summary="Export approved test cases",
    description="Download the approved test cases as CSV"
)
async def export_approved(request: ExportRequest) -> Response:
    """Export the approved subset of the submitted test cases."""
    test_cases = [tc.to_domain() for tc in request.test_cases]
    approved = [tc for tc in test_cases if tc.status == TestCaseStatus.APPROVED]
    logger.info(f"Exporting {len(approved)} approved of {len(test_cases)} submitted test cases")
    csv_text = export_approved_csv(approved)
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'}
    )
