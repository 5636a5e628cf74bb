# app/domain/models.py

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List

class TestCaseStatus(str, Enum):
    __test__ = False

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class StepStatus(str, Enum):
    PENDING = "pending"
    PASS = "pass"
    FAIL = "fail"

@dataclass
class TestCase:
    """A reviewable test case assembled from one CSV row."""
    __test__ = False

    id: str
    title: str
    steps: List[str]
    url: str = ""
    description: str = ""
    preconditions: str = ""
    postconditions: str = ""
    status: TestCaseStatus = TestCaseStatus.PENDING
    notes: str = ""

@dataclass
class ParseResult:
    """Outcome of one CSV ingestion, with per-row diagnostics."""
    test_cases: List[TestCase] = field(default_factory=list)
    total_rows: int = 0
    skipped_rows: int = 0
    truncated_rows: int = 0

    @property
    def has_warnings(self) -> bool:
        return self.truncated_rows > 0

@dataclass(frozen=True)
class Screenshot:
    """A captured image attached to one step of a test case."""
    step_index: int
    step: str
    image: str  # base64 PNG payload, no data URL prefix
    captured_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
