# app/api/routes/review.py

from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_review_service
from app.domain.exceptions import ReviewSessionException, ScreenshotException
from app.schemas.requests import ReviewDecisionRequest, ScreenshotUploadRequest
from app.schemas.responses import ScreenshotUploadResponse, TestCaseSchema
from app.services.review import ReviewService
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()

@router.post(
    "/screenshots",
    response_model=ScreenshotUploadResponse,
    summary="Store a step screenshot",
    description="Save a screenshot captured for one step of a test case"
)
async def upload_screenshot(
    request: ScreenshotUploadRequest,
    review: ReviewService = Depends(get_review_service)
) -> ScreenshotUploadResponse:
    """
    Store a screenshot for a test case step.

    Args:
        request: Case id, step position and base64 image
        review: Injected review service
    """
    try:
        path = await review.save_screenshot(
            request.case_id,
            request.step_index,
            request.step,
            request.image
        )
    except ScreenshotException as e:
        logger.warning(f"Rejected screenshot for {request.case_id}: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Screenshot storage error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to store screenshot")

    return ScreenshotUploadResponse(
        case_id=request.case_id,
        step_index=request.step_index,
        path=path
    )

@router.post(
    "/decision",
    response_model=TestCaseSchema,
    summary="Approve or reject a test case",
    description="Apply step results and a decision to a test case"
)
async def decide_test_case(
    request: ReviewDecisionRequest,
    review: ReviewService = Depends(get_review_service)
) -> TestCaseSchema:
    """Return the test case with its new status and notes."""
    try:
        decided = review.apply_decision(
            request.test_case.to_domain(),
            request.decision,
            notes=request.notes,
            step_results=request.step_results
        )
    except ReviewSessionException as e:
        raise HTTPException(status_code=400, detail=str(e))

    return TestCaseSchema.model_validate(decided)
