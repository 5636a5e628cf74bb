# tests/conftest.py

import pytest
from pathlib import Path
from fastapi.testclient import TestClient
from typing import Generator, List

from app.main import app
from app.domain.models import TestCase
from app.infrastructure.interfaces import ScreenCaptureInterface

TEST_DATA_DIR = Path(__file__).parent / "test_data"

# Fixture for FastAPI test client
@pytest.fixture
def client() -> Generator:
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

# Fixtures for test data
@pytest.fixture
def sample_csv_bytes() -> bytes:
    return (TEST_DATA_DIR / "test_cases" / "sample_export.csv").read_bytes()

@pytest.fixture
def sample_csv_text(sample_csv_bytes) -> str:
    return sample_csv_bytes.decode("utf-8")

@pytest.fixture
def sample_test_cases() -> List[TestCase]:
    return [
        TestCase(
            id="TC-1",
            title="Login with valid credentials",
            steps=[
                "Navigate to login page -> Expected: Login form is displayed",
                "Click login button"
            ],
            url="https://demo.example.com"
        ),
        TestCase(
            id="TC-2",
            title="Job search",
            steps=["Open job search", "Enter job title \"Software Developer\""],
            url="https://demo.example.com"
        )
    ]

# Mock fixtures
@pytest.fixture
def mock_screen_capture(mocker):
    return mocker.Mock(spec=ScreenCaptureInterface)
