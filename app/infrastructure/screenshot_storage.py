# app/infrastructure/screenshot_storage.py
import base64
import binascii
import os
import re

from app.domain.exceptions import ScreenshotException
from app.domain.models import Screenshot
from app.infrastructure.interfaces import ScreenshotStorageInterface

UNSAFE_FILENAME_CHARS = re.compile(r'[^A-Za-z0-9_.-]')

class ScreenshotStorage(ScreenshotStorageInterface):
    def __init__(self, base_dir: str = "screenshots"):
        self.base_dir = base_dir

    def save_screenshot(self, case_id: str, screenshot: Screenshot) -> str:
        try:
            data = base64.b64decode(screenshot.image, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ScreenshotException(f"Invalid screenshot payload for test case {case_id}: {str(e)}") from e

        file_name = f"{UNSAFE_FILENAME_CHARS.sub('_', case_id)}_step{screenshot.step_index + 1}.png"
        file_path = os.path.join(self.base_dir, file_name)
        try:
            os.makedirs(self.base_dir, exist_ok=True)
            with open(file_path, mode='wb') as f:
                f.write(data)
        except OSError as e:
            raise ScreenshotException(f"Failed to store screenshot {file_path}: {str(e)}") from e
        return file_path
