"""Response handler for API responses."""
import json
from typing import Any, Optional

from ..transport import HTTPResponse
from ...exceptions import (
    DropboxError,
    AuthError,
    ServerError,
    ApplicationError,
    NotModified,
    MalformedResponse,
)

NOT_MODIFIED = 304
UNAUTHORIZED = 401


def _parse_offset(value: Any) -> Optional[int]:
    """Offset field of an error body, None when absent or not a count."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


class ResponseHandler:
    """
    Classifies and parses API responses.

    Maps a raw response onto the error taxonomy:

    - 2xx: no error
    - 5xx: ServerError
    - 401: AuthError
    - 304: NotModified
    - other non-2xx: ApplicationError when the JSON body carries ``error``
      (or only an upload ``offset``), MalformedResponse for any other body
    """

    @staticmethod
    def classify(response: HTTPResponse) -> Optional[DropboxError]:
        """
        Classifies a response.

        Args:
            response: Raw HTTP response

        Returns:
            The error describing the response, or None for 2xx
        """
        if response.ok:
            return None

        if response.status >= 500:
            return ServerError(
                f"Dropbox Server Error: {response} - {response.text}",
                response=response
            )
        if response.status == UNAUTHORIZED:
            return AuthError("User is not authenticated.", response=response)
        if response.status == NOT_MODIFIED:
            return NotModified("metadata not modified", response=response)

        try:
            data = json.loads(response.body)
        except ValueError:
            return MalformedResponse(
                f"Dropbox Server Error: body={response.text}",
                response=response
            )

        if not isinstance(data, dict):
            return MalformedResponse(
                f"Dropbox Server Error: body={response.text}",
                response=response
            )

        if data.get('error'):
            message = data['error']
            user_message = data.get('user_error')
        elif _parse_offset(data.get('offset')) is not None:
            # offset conflict without a message
            message = response.text
            user_message = None
        else:
            return MalformedResponse(
                f"Dropbox Server Error: body={response.text}",
                response=response
            )

        return ApplicationError(
            message,
            user_message=user_message,
            response=response,
            offset=_parse_offset(data.get('offset')),
            upload_id=data.get('upload_id')
        )

    @staticmethod
    def parse_json(response: HTTPResponse) -> Any:
        """Parses a JSON body, raising MalformedResponse on failure."""
        try:
            return json.loads(response.body)
        except ValueError:
            raise MalformedResponse(
                f"Unable to parse JSON response: {response.text}",
                response=response
            )

    @staticmethod
    def parse_response(response: HTTPResponse, raw: bool = False) -> Any:
        """
        Raises the classified error or returns the parsed body.

        Args:
            response: Raw HTTP response
            raw: Return the body bytes instead of parsed JSON

        Returns:
            Parsed JSON or raw body
        """
        error = ResponseHandler.classify(response)
        if error:
            raise error

        if raw:
            return response.body
        return ResponseHandler.parse_json(response)

    @staticmethod
    def parse_metadata(response: HTTPResponse) -> Any:
        """Decodes the x-dropbox-metadata header of a download response."""
        raw_metadata = response.headers.get('x-dropbox-metadata')
        try:
            return json.loads(raw_metadata)
        except (TypeError, ValueError):
            raise MalformedResponse(
                f"Dropbox Server Error: x-dropbox-metadata={raw_metadata}",
                response=response
            )
