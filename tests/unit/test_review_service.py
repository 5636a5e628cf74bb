# tests/unit/test_review_service.py

import base64
import pytest
from unittest.mock import AsyncMock, Mock

from app.domain.exceptions import InvalidStatusTransitionException, ScreenshotException
from app.domain.models import TestCaseStatus
from app.domain.review_session import ReviewSession
from app.infrastructure.interfaces import ScreenshotStorageInterface
from app.infrastructure.screenshot_storage import ScreenshotStorage
from app.services.review import ReviewService, create_review_service

PNG_PAYLOAD = "iVBORw0KGgo="

@pytest.fixture
def session(sample_test_cases):
    return ReviewSession.start(sample_test_cases)

class TestReviewService:
    @pytest.mark.asyncio
    async def test_capture_current_step(self, session, mock_screen_capture):
        mock_screen_capture.capture.return_value = f"data:image/png;base64,{PNG_PAYLOAD}"
        service = ReviewService(screen_capture=mock_screen_capture)

        updated = await service.capture_current_step(session.next_step())

        assert updated.current_screenshot.image == PNG_PAYLOAD
        assert updated.current_screenshot.step_index == 1
        mock_screen_capture.capture.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_capture_is_persisted(self, session, mock_screen_capture):
        mock_screen_capture.capture.return_value = PNG_PAYLOAD
        storage = Mock(spec=ScreenshotStorageInterface)
        storage.save_screenshot.return_value = "screenshots/TC-1_step1.png"
        service = ReviewService(screen_capture=mock_screen_capture, storage=storage)

        updated = await service.capture_current_step(session)

        storage.save_screenshot.assert_called_once_with("TC-1", updated.current_screenshot)

    @pytest.mark.asyncio
    async def test_capture_failure_is_wrapped(self, session, mock_screen_capture):
        mock_screen_capture.capture.side_effect = RuntimeError("Permission denied")
        service = ReviewService(screen_capture=mock_screen_capture)

        with pytest.raises(ScreenshotException, match="Permission denied"):
            await service.capture_current_step(session)

    @pytest.mark.asyncio
    async def test_storage_runs_off_the_event_loop(self, session, mock_screen_capture, mocker):
        mock_screen_capture.capture.return_value = PNG_PAYLOAD
        storage = Mock(spec=ScreenshotStorageInterface)
        to_thread = mocker.patch("app.services.review.asyncio.to_thread", new_callable=AsyncMock)
        to_thread.return_value = "screenshots/TC-1_step1.png"
        service = ReviewService(screen_capture=mock_screen_capture, storage=storage)

        updated = await service.capture_current_step(session)

        to_thread.assert_awaited_once_with(storage.save_screenshot, "TC-1", updated.current_screenshot)
        storage.save_screenshot.assert_not_called()

    @pytest.mark.asyncio
    async def test_capture_without_source(self, session):
        with pytest.raises(ScreenshotException):
            await ReviewService().capture_current_step(session)

    @pytest.mark.asyncio
    async def test_save_screenshot(self, tmp_path):
        service = ReviewService(storage=ScreenshotStorage(str(tmp_path)))

        path = await service.save_screenshot("TC-1", 0, "Open page", f"data:image/png;base64,{PNG_PAYLOAD}")

        assert path == str(tmp_path / "TC-1_step1.png")
        assert (tmp_path / "TC-1_step1.png").read_bytes() == base64.b64decode(PNG_PAYLOAD)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("image", ["", "data:image/png;base64,"])
    async def test_save_empty_screenshot(self, tmp_path, image):
        service = ReviewService(storage=ScreenshotStorage(str(tmp_path)))
        with pytest.raises(ScreenshotException):
            await service.save_screenshot("TC-1", 0, "Open page", image)

    @pytest.mark.asyncio
    async def test_save_screenshot_without_storage(self):
        with pytest.raises(ScreenshotException):
            await ReviewService().save_screenshot("TC-1", 0, "Open page", PNG_PAYLOAD)

    def test_apply_decision(self, sample_test_cases):
        decided = ReviewService().apply_decision(
            sample_test_cases[0],
            "rejected",
            notes="Broken",
            step_results={1: "fail", 0: "pass"}
        )

        assert decided.status == TestCaseStatus.REJECTED
        assert decided.notes == "Broken\n\nFailed steps: 2"
        assert sample_test_cases[0].status == TestCaseStatus.PENDING

    def test_apply_decision_rejects_pending(self, sample_test_cases):
        with pytest.raises(InvalidStatusTransitionException):
            ReviewService().apply_decision(sample_test_cases[0], "pending")

    def test_export_only_approved(self, session, mock_screen_capture):
        service = ReviewService(screen_capture=mock_screen_capture)
        reviewed = session.decide("approved").decide("rejected")

        lines = service.export(reviewed).splitlines()

        assert lines[0] == '"id","title","steps","url","status","notes"'
        assert lines[1].startswith('"TC-1","Login with valid credentials"')
        assert not any("TC-2" in line for line in lines)

    def test_create_review_service(self, mock_screen_capture):
        service = create_review_service(mock_screen_capture)
        assert isinstance(service.storage, ScreenshotStorage)
        assert service.storage.base_dir == "screenshots"

        assert create_review_service(mock_screen_capture, persist=False).storage is None
        assert create_review_service().screen_capture is None
