"""Dropbox API plumbing: configuration, transport and request handling."""
from .config import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig, RetryConfig
from .transport import Transport, RequestsTransport, HTTPResponse, SessionFactory
from .request import RequestBuilder, ResponseHandler
from .params import PutFileOptions, CommitOptions, MetadataQuery, SearchQuery

__all__ = [
    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',

    # Transport
    'Transport',
    'RequestsTransport',
    'HTTPResponse',
    'SessionFactory',

    # Requests
    'RequestBuilder',
    'ResponseHandler',

    # Parameters
    'PutFileOptions',
    'CommitOptions',
    'MetadataQuery',
    'SearchQuery',
]
