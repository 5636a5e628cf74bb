# app/domain/review_session.py

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional, Tuple, Union

from app.domain.exceptions import (
    InvalidStatusTransitionException,
    ReviewSessionException,
    ScreenshotException
)
from app.domain.models import Screenshot, StepStatus, TestCase, TestCaseStatus

DATA_URL_PREFIX = "data:"

def strip_data_url(image: str) -> str:
    """Return the base64 payload of a ``data:image/png;base64,...`` URL."""
    if image.startswith(DATA_URL_PREFIX):
        return image.split(",", 1)[1] if "," in image else ""
    return image

@dataclass(frozen=True)
class CaseReview:
    """Review progress on a single test case."""
    step_index: int = 0
    step_results: Dict[int, StepStatus] = field(default_factory=dict)
    screenshots: Dict[int, Screenshot] = field(default_factory=dict)
    notes: str = ""

    def failed_steps(self) -> List[int]:
        """1-based numbers of the steps marked as failed."""
        return sorted(
            index + 1
            for index, result in self.step_results.items()
            if result == StepStatus.FAIL
        )

@dataclass(frozen=True)
class ReviewSession:
    """State of one reviewer working through an uploaded batch.

    Every action returns a new session and leaves the current one untouched,
    so callers can keep earlier sessions around for undo.
    """
    test_cases: Tuple[TestCase, ...] = ()
    current_index: int = 0
    reviewed_count: int = 0
    reviews: Dict[int, CaseReview] = field(default_factory=dict)

    @classmethod
    def start(cls, test_cases: Iterable[TestCase]) -> "ReviewSession":
        return cls(test_cases=tuple(replace(tc, steps=list(tc.steps)) for tc in test_cases))

    @property
    def current_case(self) -> TestCase:
        self._ensure_not_empty()
        return self.test_cases[self.current_index]

    @property
    def current_review(self) -> CaseReview:
        return self.reviews.get(self.current_index, CaseReview())

    @property
    def current_step(self) -> str:
        return self.current_case.steps[self.current_review.step_index]

    @property
    def current_screenshot(self) -> Optional[Screenshot]:
        return self.current_review.screenshots.get(self.current_review.step_index)

    @property
    def progress(self) -> Tuple[int, int]:
        return self.reviewed_count, len(self.test_cases)

    @property
    def approved_cases(self) -> List[TestCase]:
        return [tc for tc in self.test_cases if tc.status == TestCaseStatus.APPROVED]

    def navigate_to(self, index: int) -> "ReviewSession":
        self._ensure_not_empty()
        if not 0 <= index < len(self.test_cases):
            raise ReviewSessionException(
                f"Test case index {index} out of range (0-{len(self.test_cases) - 1})"
            )
        return replace(self, current_index=index)

    def navigate_to_step(self, step_index: int) -> "ReviewSession":
        step_count = len(self.current_case.steps)
        if not 0 <= step_index < step_count:
            raise ReviewSessionException(
                f"Step index {step_index} out of range (0-{step_count - 1})"
            )
        return self._with_review(replace(self.current_review, step_index=step_index))

    def next_step(self) -> "ReviewSession":
        review = self.current_review
        last_step = len(self.current_case.steps) - 1
        return self._with_review(replace(review, step_index=min(review.step_index + 1, last_step)))

    def previous_step(self) -> "ReviewSession":
        self._ensure_not_empty()
        review = self.current_review
        return self._with_review(replace(review, step_index=max(review.step_index - 1, 0)))

    def mark_step(self, result: Union[StepStatus, str]) -> "ReviewSession":
        self._ensure_not_empty()
        review = self.current_review
        step_results = dict(review.step_results)
        try:
            step_results[review.step_index] = StepStatus(result)
        except ValueError as e:
            raise ReviewSessionException(f"Unknown step result: {result!r}") from e
        return self._with_review(replace(review, step_results=step_results))

    def attach_screenshot(self, image: str) -> "ReviewSession":
        """Attach a capture to the current step, replacing any earlier one.

        Accepts a bare base64 payload or a ``data:image/png;base64,...`` URL.
        """
        image = strip_data_url(image)
        if not image.strip():
            raise ScreenshotException("Screenshot payload is empty")

        review = self.current_review
        screenshots = dict(review.screenshots)
        screenshots[review.step_index] = Screenshot(
            step_index=review.step_index,
            step=self.current_step,
            image=image
        )
        return self._with_review(replace(review, screenshots=screenshots))

    def decide(self, status: Union[TestCaseStatus, str], notes: str = "") -> "ReviewSession":
        """Approve or reject the current case and move on to the next one."""
        try:
            status = TestCaseStatus(status)
        except ValueError as e:
            raise InvalidStatusTransitionException(f"Unknown test case status: {status!r}") from e
        if status == TestCaseStatus.PENDING:
            raise InvalidStatusTransitionException("A test case can only be approved or rejected")

        case = self.current_case
        review = self.current_review
        failed = review.failed_steps()
        if failed:
            notes += f"\n\nFailed steps: {', '.join(str(n) for n in failed)}"

        test_cases = list(self.test_cases)
        test_cases[self.current_index] = replace(case, status=status, notes=notes)
        reviewed_count = self.reviewed_count + (1 if case.status == TestCaseStatus.PENDING else 0)
        next_index = min(self.current_index + 1, len(self.test_cases) - 1)

        session = self._with_review(replace(review, notes=notes))
        return replace(
            session,
            test_cases=tuple(test_cases),
            reviewed_count=reviewed_count,
            current_index=next_index
        )

    def _with_review(self, review: CaseReview) -> "ReviewSession":
        reviews = dict(self.reviews)
        reviews[self.current_index] = review
        return replace(self, reviews=reviews)

    def _ensure_not_empty(self) -> None:
        if not self.test_cases:
            raise ReviewSessionException("Review session has no test cases")
