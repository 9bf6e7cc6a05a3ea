"""
dropboxpy - Python client for the Dropbox API.

Usage:
    >>> from dropboxpy import AuthSession, DropboxClient
    >>>
    >>> session = AuthSession("app-key", "app-secret")
    >>> print(session.build_authorize_url())
    >>> # ... user approves the app ...
    >>> client = DropboxClient(session)
    >>> uploader = client.get_chunked_uploader(open("big.iso", "rb"))
    >>> uploader.upload()
    >>> uploader.finish("/big.iso")
"""
import logging

__version__ = '1.0.0'

from .client import DropboxClient

# Authentication
from .core.auth import AuthSession, Credentials, TokenPair

# Configuration
from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    RetryConfig,
    RequestsTransport,
    HTTPResponse,
)

# Uploads
from .core.upload import (
    ChunkedUploadCoordinator,
    FileByteSource,
    BytesSource,
    UploadProgress,
)

# Logging
from .core.logging import get_logger, configure_logging

# Errors
from .core.exceptions import (
    DropboxError,
    TransportError,
    AuthError,
    AuthProtocolError,
    NotAuthorizedError,
    ServerError,
    ApplicationError,
    NotModified,
    MalformedResponse,
    UploadStateError,
)


def setup_logging(level=logging.INFO):
    """
    Configure logging for dropboxpy modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'dropboxpy',
        'dropboxpy.client',
        'dropboxpy.auth',
        'dropboxpy.transport',
        'dropboxpy.upload.coordinator',
        'dropboxpy.upload.chunk',
        'dropboxpy.upload.file',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'DropboxClient',
    'AuthSession',
    'Credentials',
    'TokenPair',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
    'RequestsTransport',
    'HTTPResponse',
    'ChunkedUploadCoordinator',
    'FileByteSource',
    'BytesSource',
    'UploadProgress',
    'DropboxError',
    'TransportError',
    'AuthError',
    'AuthProtocolError',
    'NotAuthorizedError',
    'ServerError',
    'ApplicationError',
    'NotModified',
    'MalformedResponse',
    'UploadStateError',
    'setup_logging',
    'configure_logging',
    'get_logger',
]
