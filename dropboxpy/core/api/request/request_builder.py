"""Request builder for API requests."""
from urllib.parse import urlencode
from typing import Dict, Optional

from ..config import APIConfig


class RequestBuilder:
    """Builds API URLs."""

    def __init__(self, config: Optional[APIConfig] = None, locale: Optional[str] = None):
        """Initializes request builder."""
        self.config = config or APIConfig.default()
        self.locale = locale

    def build_url(
        self,
        path: str,
        params: Optional[Dict[str, str]] = None,
        content_server: bool = False
    ) -> str:
        """
        Builds a versioned API URL.

        Args:
            path: Endpoint path, already escaped (e.g. '/metadata/sandbox/a')
            params: Query parameters, values already converted to str
            content_server: Target the content host instead of the API host

        Returns:
            Absolute https URL
        """
        host = self.config.api_content_server if content_server else self.config.api_server
        url = f"https://{host}:{self.config.port}/{self.config.api_version}{path}"

        query = dict(params or {})
        if self.locale:
            query['locale'] = self.locale
        if query:
            url += '?' + urlencode(query)
        return url

    def build_web_url(self, path: str) -> str:
        """Builds a versioned URL on the human-facing web host."""
        return f"https://{self.config.web_server}/{self.config.api_version}{path}"

    @staticmethod
    def build_headers(content_type: Optional[str] = None) -> Dict[str, str]:
        """Builds request headers."""
        headers = {}
        if content_type:
            headers['Content-Type'] = content_type
        return headers
