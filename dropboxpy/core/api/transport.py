"""
HTTP transport.

The core only talks to the network through the Transport protocol, which
executes one request and returns status, headers and body. RequestsTransport
is the default implementation, built on a requests.Session.
"""
from dataclasses import dataclass, field
from typing import Protocol, Optional, Dict, Any, Mapping, runtime_checkable

import requests
from requests.adapters import HTTPAdapter, Retry
from requests.structures import CaseInsensitiveDict

from .config import APIConfig
from ..exceptions import TransportError
from ..logging import get_logger

logger = get_logger('transport')


@dataclass
class HTTPResponse:
    """
    Raw HTTP response as seen by the core.

    Attributes:
        status: HTTP status code
        body: Raw response body
        headers: Response headers (case-insensitive)
        reason: HTTP reason phrase
    """
    status: int
    body: bytes = b''
    headers: Mapping[str, str] = field(default_factory=dict)
    reason: str = ''

    def __post_init__(self):
        if not isinstance(self.headers, CaseInsensitiveDict):
            self.headers = CaseInsensitiveDict(self.headers)

    @property
    def ok(self) -> bool:
        """True for 2xx responses."""
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        """Body decoded as UTF-8."""
        return self.body.decode('utf-8', errors='replace')

    def __str__(self) -> str:
        return f"{self.status} {self.reason}".strip()


@runtime_checkable
class Transport(Protocol):
    """Protocol for HTTP transports."""

    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: Any = None
    ) -> HTTPResponse:
        """
        Execute a single HTTP request.

        Args:
            method: HTTP method
            url: Absolute URL
            headers: Request headers (including Authorization)
            body: bytes, a readable file object, or a dict of form fields

        Returns:
            HTTPResponse

        Raises:
            TransportError: On connection, TLS or timeout failure
        """
        ...

    def close(self) -> None:
        """Release connections."""
        ...


class SessionFactory:
    """Factory for creating HTTP sessions."""

    @staticmethod
    def create_sync_session(config: APIConfig) -> requests.Session:
        """Creates a synchronous HTTP session from configuration."""
        session = requests.Session()
        session.headers.update(config.get_session_headers())
        if config.retry.max_retries:
            # connection errors only; statuses are never retried
            retries = Retry(
                total=config.retry.max_retries,
                status=0,
                backoff_factor=config.retry.backoff_factor
            )
            session.mount('http://', HTTPAdapter(max_retries=retries))
            session.mount('https://', HTTPAdapter(max_retries=retries))
        return session


class RequestsTransport:
    """
    Transport backed by requests.

    Certificates are verified against the configured bundle, redirects are
    not followed and every request uses the configured timeout.
    """

    def __init__(
        self,
        config: Optional[APIConfig] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize transport.

        Args:
            config: API configuration
            session: Optional pre-built requests session
        """
        self._config = config or APIConfig.default()
        self._session = session or SessionFactory.create_sync_session(self._config)
        self._request_kwargs = self._config.get_request_kwargs()

    @property
    def config(self) -> APIConfig:
        return self._config

    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: Any = None
    ) -> HTTPResponse:
        """Execute request, wrapping requests exceptions into TransportError."""
        logger.debug(f"{method} {url.split('?', 1)[0]}")
        try:
            response = self._session.request(
                method,
                url,
                headers=headers,
                data=body,
                **self._request_kwargs
            )
        except requests.exceptions.SSLError as e:
            raise TransportError(
                f"SSL error connecting to {url.split('/')[2]}. "
                f"There may be a problem with the trusted certificate bundle: {e}"
            ) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request to {url.split('?', 1)[0]} failed: {e}") from e

        return HTTPResponse(
            status=response.status_code,
            body=response.content,
            headers=response.headers,
            reason=response.reason or ''
        )

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> 'RequestsTransport':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
