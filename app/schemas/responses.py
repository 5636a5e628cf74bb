# app/schemas/responses.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Dict

from app.domain.models import ParseResult, TestCase, TestCaseStatus

class TestCaseSchema(BaseModel):
    """Test case as exchanged with the review UI."""
    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    steps: List[str] = Field(min_length=1)
    url: str = ""
    status: TestCaseStatus = TestCaseStatus.PENDING
    description: str = ""
    preconditions: str = ""
    postconditions: str = ""
    notes: str = ""

    model_config = ConfigDict(from_attributes=True)

    def to_domain(self) -> TestCase:
        return TestCase(**self.model_dump())

class UploadResponse(BaseModel):
    """Response model for a parsed CSV upload."""
    test_cases: List[TestCaseSchema]
    total_rows: int
    skipped_rows: int
    truncated_rows: int

    @classmethod
    def from_result(cls, result: ParseResult) -> "UploadResponse":
        return cls(
            test_cases=[TestCaseSchema.model_validate(tc) for tc in result.test_cases],
            total_rows=result.total_rows,
            skipped_rows=result.skipped_rows,
            truncated_rows=result.truncated_rows
        )

class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str
    version: str
    components: Dict[str, Any]

class ScreenshotUploadResponse(BaseModel):
    """Response model for a stored screenshot."""
    case_id: str
    step_index: int
    path: str
