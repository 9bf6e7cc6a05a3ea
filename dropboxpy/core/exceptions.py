"""
Custom exceptions for Dropbox operations.

Every failure raised by this package is a DropboxError carrying the raw
server message, an optional human-readable translated message and the raw
HTTP response when one exists.
"""
from typing import Optional, Any


class DropboxError(Exception):
    """Base exception for all Dropbox-related errors."""

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        response: Any = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Technical error message (as reported by the server)
            user_message: Translated, user-facing message (if supplied)
            response: Raw HTTP response (if available)
        """
        self.message = message
        self.user_message = user_message
        self.response = response
        super().__init__(message)

    def __str__(self) -> str:
        if self.user_message:
            return f"{self.user_message} ({self.message})"
        return f"{self.message}"


class TransportError(DropboxError):
    """Exception raised when the connection or TLS handshake fails."""
    pass


class AuthError(DropboxError):
    """
    Exception raised for authentication failures (HTTP 401).

    Usually the token was never approved, is invalid or expired, or the
    user revoked the application.
    """
    pass


class AuthProtocolError(AuthError):
    """Exception raised when an OAuth handshake step is rejected or malformed."""
    pass


class NotAuthorizedError(DropboxError):
    """Exception raised when an API call is made before an access token exists."""
    pass


class ServerError(DropboxError):
    """Exception raised for 5xx responses."""
    pass


class ApplicationError(DropboxError):
    """Exception raised for structured non-2xx responses."""

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        response: Any = None,
        offset: Optional[int] = None,
        upload_id: Optional[str] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Value of the ``error`` field
            user_message: Value of the ``user_error`` field
            response: Raw HTTP response
            offset: Server-side upload offset (chunked upload conflicts)
            upload_id: Server-side upload id (chunked upload conflicts)
        """
        self.offset = offset
        self.upload_id = upload_id
        super().__init__(message, user_message, response)


class NotModified(DropboxError):
    """Exception raised when metadata matches the hash supplied by the caller."""
    pass


class MalformedResponse(DropboxError):
    """Exception raised when a response body or header cannot be parsed."""
    pass


class UploadStateError(DropboxError):
    """Exception raised when a chunked upload cannot make consistent progress."""
    pass
