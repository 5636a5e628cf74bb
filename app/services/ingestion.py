# app/services/ingestion.py

from typing import Optional

from app.domain.csv_parser import CSVParser, CSVParserFactory
from app.domain.exceptions import (
    InvalidFileEncodingException,
    MalformedCSVException,
    UploadTooLargeException
)
from app.domain.models import ParseResult
from app.utils.config import Settings, get_settings
from app.utils.logger import get_logger

logger = get_logger(__name__)

class IngestionService:
    """Decodes uploaded CSV exports and runs them through the parser."""

    def __init__(self, parser: CSVParser, max_upload_bytes: int):
        self.parser = parser
        self.max_upload_bytes = max_upload_bytes

    def decode_upload(self, content: bytes) -> str:
        if len(content) > self.max_upload_bytes:
            raise UploadTooLargeException(
                f"File is {len(content)} bytes, limit is {self.max_upload_bytes} bytes"
            )
        if not content.strip():
            raise MalformedCSVException("Uploaded file is empty")
        try:
            # utf-8-sig drops the BOM spreadsheet tools put in front of exports
            return content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise InvalidFileEncodingException(f"File is not valid UTF-8: {str(e)}") from e

    def ingest(self, content: bytes, filename: Optional[str] = None) -> ParseResult:
        logger.info(f"Ingesting {filename or 'upload'} ({len(content)} bytes)")
        result = self.parse_text(self.decode_upload(content))
        if result.has_warnings:
            logger.warning(
                f"{filename or 'upload'}: {result.truncated_rows} row(s) lost to an unterminated quoted field"
            )
        return result

    def parse_text(self, text: str) -> ParseResult:
        return self.parser.parse(text)

def create_csv_parser(settings: Optional[Settings] = None) -> CSVParser:
    """Build the test case parser from application settings."""
    settings = settings or get_settings()
    return CSVParserFactory.create_parser(
        "test_case",
        columns=settings.csv_columns,
        empty_steps_placeholder=settings.empty_steps_placeholder,
        default_url=settings.default_test_url
    )

def create_ingestion_service(settings: Optional[Settings] = None) -> IngestionService:
    settings = settings or get_settings()
    return IngestionService(
        parser=create_csv_parser(settings),
        max_upload_bytes=settings.max_upload_bytes
    )

def parse_test_cases(text: str) -> ParseResult:
    """Parse decoded CSV text with the configured parser."""
    return create_csv_parser().parse(text)
