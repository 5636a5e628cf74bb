# app/schemas/requests.py

from pydantic import BaseModel, Field
from typing import Dict, List

from app.domain.models import StepStatus, TestCaseStatus
from app.schemas.responses import TestCaseSchema

class ExportRequest(BaseModel):
    """Request model for exporting reviewed test cases."""
    test_cases: List[TestCaseSchema]

class ScreenshotUploadRequest(BaseModel):
    """Request model for storing a screenshot taken by the review UI."""
    case_id: str = Field(min_length=1)
    step_index: int = Field(ge=0)
    step: str = ""
    image: str = Field(min_length=1, description="Base64 PNG payload or data URL")

class ReviewDecisionRequest(BaseModel):
    """Request model for approving or rejecting a test case."""
    test_case: TestCaseSchema
    decision: TestCaseStatus
    notes: str = ""
    step_results: Dict[int, StepStatus] = Field(default_factory=dict)
