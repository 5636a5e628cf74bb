# app/domain/exceptions.py

class CSVParsingException(Exception):
    """Base exception for test case CSV ingestion errors."""
    pass

class MalformedCSVException(CSVParsingException):
    """Exception for documents without any data line after the header."""
    pass

class InvalidFileEncodingException(CSVParsingException):
    """Exception for uploads that cannot be decoded as UTF-8."""
    pass

class UploadTooLargeException(CSVParsingException):
    """Exception for uploads above the configured size limit."""
    pass

class ReviewSessionException(Exception):
    """Base exception for review session errors."""
    pass

class InvalidStatusTransitionException(ReviewSessionException):
    """Exception for a final decision that is not approve or reject."""
    pass

class ScreenshotException(Exception):
    """Exception for screenshot payload or storage failures."""
    pass
