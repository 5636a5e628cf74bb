# app/api/routes/upload.py

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from typing import Optional

from app.api.dependencies import get_ingestion_service
from app.domain.exceptions import CSVParsingException, UploadTooLargeException
from app.schemas.responses import UploadResponse
from app.services.ingestion import IngestionService
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()

@router.post(
    "",
    response_model=UploadResponse,
    summary="Upload test cases",
    description="Parse a CSV export of test cases into reviewable test cases"
)
async def upload_test_cases(
    file: Optional[UploadFile] = File(None),
    ingestion: IngestionService = Depends(get_ingestion_service)
) -> UploadResponse:
    """
    Parse an uploaded CSV export.

    Args:
        file: Multipart file field named ``file``
        ingestion: Injected ingestion service
    """
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    content = await file.read()
    try:
        result = ingestion.ingest(content, filename=file.filename)
    except UploadTooLargeException as e:
        raise HTTPException(status_code=413, detail=str(e))
    except CSVParsingException as e:
        logger.warning(f"Rejected upload {file.filename}: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Upload error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to process file")

    return UploadResponse.from_result(result)
