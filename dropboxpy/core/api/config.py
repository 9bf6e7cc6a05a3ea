"""
API configuration module.

Provides configuration for the Dropbox API client and its HTTP transport.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Tuple, Union


@dataclass
class ProxyConfig:
    """
    Proxy configuration.

    Supports HTTP and HTTPS proxies.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def to_requests_proxies(self) -> Optional[Dict[str, str]]:
        """Convert to requests proxies mapping."""
        if not self.url:
            return None

        url = self.url
        if self.username and self.password and '://' in url:
            protocol, rest = url.split('://', 1)
            url = f"{protocol}://{self.username}:{self.password}@{rest}"

        return {'http': url, 'https': url}


@dataclass
class SSLConfig:
    """
    SSL/TLS configuration.

    Certificates are always checked; there is no switch to turn this off.
    A custom trusted-root bundle can be supplied through ca_file.
    """
    ca_file: Optional[str] = None
    cert_file: Optional[str] = None
    key_file: Optional[str] = None

    def to_requests_verify(self) -> Union[bool, str]:
        """Value for the requests ``verify`` argument."""
        return self.ca_file or True

    def to_requests_cert(self) -> Optional[Union[str, Tuple[str, str]]]:
        """Value for the requests ``cert`` argument."""
        if not self.cert_file:
            return None
        if self.key_file:
            return (self.cert_file, self.key_file)
        return self.cert_file


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    None means wait forever, which is what requests does by default.
    """
    connect: Optional[float] = 30.0  # Connection timeout
    read: Optional[float] = 120.0  # Socket read timeout

    def to_requests_timeout(self) -> Tuple[Optional[float], Optional[float]]:
        """Convert to requests (connect, read) timeout tuple."""
        return (self.connect, self.read)


@dataclass
class RetryConfig:
    """
    Retry configuration.

    Only connection-level failures are retried, and only when max_retries
    is raised above zero. HTTP error statuses are never retried.
    """
    max_retries: int = 0
    backoff_factor: float = 0.5

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError("max_retries must not be negative")


@dataclass
class APIConfig:
    """
    Complete API configuration.

    Centralizes host names, API version and transport options.
    """
    # Hosts
    api_server: str = 'api.dropbox.com'
    api_content_server: str = 'api-content.dropbox.com'
    web_server: str = 'www.dropbox.com'
    port: int = 443

    api_version: int = 1

    # User agent (defaults to dropboxpy/<version>)
    user_agent: Optional[str] = None

    # Sub-configurations
    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)

    # Additional headers
    extra_headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'APIConfig':
        """Create configuration with proxy."""
        return cls(
            proxy=ProxyConfig(url=proxy_url),
            **kwargs
        )

    def get_user_agent(self) -> str:
        """User agent sent with every request."""
        if self.user_agent:
            return self.user_agent
        from dropboxpy import __version__
        return f"dropboxpy/{__version__}"

    def get_request_kwargs(self) -> Dict[str, Any]:
        """Get per-request kwargs for requests.Session.request."""
        kwargs: Dict[str, Any] = {
            'verify': self.ssl.to_requests_verify(),
            'timeout': self.timeout.to_requests_timeout(),
            'allow_redirects': False,
        }
        cert = self.ssl.to_requests_cert()
        if cert:
            kwargs['cert'] = cert
        if self.proxy:
            proxies = self.proxy.to_requests_proxies()
            if proxies:
                kwargs['proxies'] = proxies
        return kwargs

    def get_session_headers(self) -> Dict[str, str]:
        """Get default headers for the HTTP session."""
        return {
            'User-Agent': self.get_user_agent(),
            **self.extra_headers
        }
