# app/services/review.py

from typing import Dict, Optional, Union
import asyncio

from app.domain.exceptions import ScreenshotException
from app.domain.models import Screenshot, StepStatus, TestCase, TestCaseStatus
from app.domain.review_session import ReviewSession, strip_data_url
from app.infrastructure.interfaces import ScreenCaptureInterface, ScreenshotStorageInterface
from app.infrastructure.screenshot_storage import ScreenshotStorage
from app.services.exporter import export_approved_csv
from app.utils.config import get_settings
from app.utils.logger import get_logger

logger = get_logger(__name__)

class ReviewService:
    """Connects a review session to screen capture, storage and export."""

    def __init__(
        self,
        screen_capture: Optional[ScreenCaptureInterface] = None,
        storage: Optional[ScreenshotStorageInterface] = None
    ):
        self.screen_capture = screen_capture
        self.storage = storage

    async def capture_current_step(self, session: ReviewSession) -> ReviewSession:
        """
        Capture the screen for the session's current step.

        Args:
            session: Session whose current step receives the screenshot

        Returns:
            ReviewSession: New session with the screenshot attached
        """
        if self.screen_capture is None:
            raise ScreenshotException("No screen capture source is configured")

        case = session.current_case
        step_number = session.current_review.step_index + 1
        try:
            image = await self.screen_capture.capture()
        except ScreenshotException:
            raise
        except Exception as e:
            logger.error(f"Screen capture failed for {case.id} step {step_number}: {str(e)}", exc_info=True)
            raise ScreenshotException(f"Screen capture failed: {str(e)}") from e

        updated = session.attach_screenshot(image)
        if self.storage is not None:
            path = await asyncio.to_thread(self.storage.save_screenshot, case.id, updated.current_screenshot)
            logger.debug(f"Stored screenshot for {case.id} step {step_number} at {path}")
        return updated

    async def save_screenshot(self, case_id: str, step_index: int, step: str, image: str) -> str:
        """
        Store a screenshot the client captured itself.

        Args:
            case_id: Test case the screenshot belongs to
            step_index: 0-based step position
            step: Step text shown while capturing
            image: Base64 PNG payload or data URL

        Returns:
            str: Path of the stored file
        """
        if self.storage is None:
            raise ScreenshotException("Screenshot storage is not configured")

        payload = strip_data_url(image)
        if not payload.strip():
            raise ScreenshotException("Screenshot payload is empty")

        screenshot = Screenshot(step_index=step_index, step=step, image=payload)
        path = await asyncio.to_thread(self.storage.save_screenshot, case_id, screenshot)
        logger.info(f"Stored screenshot for {case_id} step {step_index + 1} at {path}")
        return path

    def apply_decision(
        self,
        test_case: TestCase,
        decision: Union[TestCaseStatus, str],
        notes: str = "",
        step_results: Optional[Dict[int, Union[StepStatus, str]]] = None
    ) -> TestCase:
        """Record step results and a decision on one case, returning the decided case."""
        session = ReviewSession.start([test_case])
        for step_index, result in sorted((step_results or {}).items()):
            session = session.navigate_to_step(step_index).mark_step(result)

        decided = session.decide(decision, notes).test_cases[0]
        logger.info(f"Test case {decided.id} marked {decided.status.value}")
        return decided

    def export(self, session: ReviewSession) -> str:
        approved = session.approved_cases
        logger.info(f"Exporting {len(approved)} approved of {len(session.test_cases)} test cases")
        return export_approved_csv(approved)

def create_review_service(
    screen_capture: Optional[ScreenCaptureInterface] = None,
    persist: bool = True
) -> ReviewService:
    """Create a review service, storing screenshots under the configured directory."""
    storage = ScreenshotStorage(get_settings().screenshot_dir) if persist else None
    return ReviewService(screen_capture=screen_capture, storage=storage)
