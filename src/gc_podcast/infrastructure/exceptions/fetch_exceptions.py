"""Exceptions related to fetching conference pages.

This module provides custom exceptions for handling errors that occur
when retrieving index pages, talk pages and content API payloads.
"""


class FetchError(Exception):
    """Base exception for all page fetching errors."""

    pass


class HttpStatusError(FetchError):
    """Exception raised when the server answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int, url: str | None = None) -> None:
        """Initialize HttpStatusError.

        Args:
            message: Error message
            status_code: HTTP status code returned by the server
            url: The URL that was requested
        """
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class FetchConnectionError(FetchError):
    """Exception raised when the connection fails or times out."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        """Initialize FetchConnectionError.

        Args:
            message: Error message
            original_error: Original exception that caused this error
        """
        super().__init__(message)
        self.original_error = original_error


class ResponseFormatError(FetchError):
    """Exception raised when a response cannot be parsed as expected."""

    def __init__(self, message: str, response_text: str | None = None) -> None:
        """Initialize ResponseFormatError.

        Args:
            message: Error message
            response_text: The raw response text that couldn't be parsed
        """
        super().__init__(message)
        self.response_text = response_text
