# app/infrastructure/interfaces.py

from abc import ABC, abstractmethod

from app.domain.models import Screenshot


class ScreenCaptureInterface(ABC):
    """Abstract interface for screen capture providers.

    Capturing happens outside this service (e.g. the browser's screen sharing
    API); implementations only hand back the resulting image.
    """

    @abstractmethod
    async def capture(self) -> str:
        """Capture the screen and return a base64 PNG payload or data URL."""
        pass

class ScreenshotStorageInterface(ABC):
    """Abstract interface for persisting captured screenshots."""

    @abstractmethod
    def save_screenshot(self, case_id: str, screenshot: Screenshot) -> str:
        """Persist the screenshot and return where it was stored."""
        pass
