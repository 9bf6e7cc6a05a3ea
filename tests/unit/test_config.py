"""Tests for API configuration and request building."""
import pytest
from requests.adapters import HTTPAdapter

from dropboxpy import __version__
from dropboxpy.core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    RetryConfig,
    SessionFactory,
    RequestBuilder,
)


class TestAPIConfig:
    """Test suite for APIConfig."""

    def test_defaults(self):
        config = APIConfig.default()

        assert config.api_server == 'api.dropbox.com'
        assert config.api_content_server == 'api-content.dropbox.com'
        assert config.web_server == 'www.dropbox.com'
        assert config.api_version == 1

    def test_request_kwargs(self):
        """Test certificates are verified and redirects are not followed."""
        kwargs = APIConfig().get_request_kwargs()

        assert kwargs == {
            'verify': True,
            'timeout': (30.0, 120.0),
            'allow_redirects': False,
        }

    def test_ca_file(self):
        config = APIConfig(ssl=SSLConfig(ca_file='/etc/ssl/dropbox.pem'))

        assert config.get_request_kwargs()['verify'] == '/etc/ssl/dropbox.pem'

    def test_verification_cannot_be_disabled(self):
        """Test there is no way to turn certificate checks off."""
        assert not hasattr(APIConfig, 'insecure')
        with pytest.raises(TypeError):
            SSLConfig(verify=False)
        assert APIConfig(ssl=SSLConfig(ca_file=None)).get_request_kwargs()['verify'] is True

    def test_client_cert(self):
        config = APIConfig(ssl=SSLConfig(cert_file='c.pem', key_file='k.pem'))

        assert config.get_request_kwargs()['cert'] == ('c.pem', 'k.pem')

    def test_proxy(self):
        config = APIConfig.with_proxy('http://proxy:3128')

        assert config.get_request_kwargs()['proxies'] == {
            'http': 'http://proxy:3128', 'https': 'http://proxy:3128'
        }

    def test_proxy_credentials(self):
        proxy = ProxyConfig(url='http://proxy:3128', username='u', password='p')

        assert proxy.to_requests_proxies()['https'] == 'http://u:p@proxy:3128'

    def test_user_agent(self):
        assert APIConfig().get_user_agent() == f'dropboxpy/{__version__}'
        assert APIConfig(user_agent='app/2').get_user_agent() == 'app/2'

    def test_session_headers(self):
        headers = APIConfig(extra_headers={'X-Test': '1'}).get_session_headers()

        assert headers['User-Agent'].startswith('dropboxpy/')
        assert headers['X-Test'] == '1'

    def test_negative_retries(self):
        with pytest.raises(ValueError):
            RetryConfig(max_retries=-1)


class TestSessionFactory:
    """Test suite for SessionFactory."""

    def test_no_retries_by_default(self):
        session = SessionFactory.create_sync_session(APIConfig())

        assert session.get_adapter('https://api.dropbox.com').max_retries.total == 0
        assert session.headers['User-Agent'].startswith('dropboxpy/')

    def test_retries_mounted(self):
        config = APIConfig(retry=RetryConfig(max_retries=3))

        session = SessionFactory.create_sync_session(config)

        adapter = session.get_adapter('https://api.dropbox.com')
        assert isinstance(adapter, HTTPAdapter)
        assert adapter.max_retries.total == 3


class TestRequestBuilder:
    """Test suite for RequestBuilder."""

    def test_api_url(self):
        assert RequestBuilder().build_url('/account/info') == (
            'https://api.dropbox.com:443/1/account/info'
        )

    def test_content_url_with_params(self):
        url = RequestBuilder().build_url('/files/sandbox/a', {'rev': 'x y'}, content_server=True)

        assert url == 'https://api-content.dropbox.com:443/1/files/sandbox/a?rev=x+y'

    def test_locale_last(self):
        url = RequestBuilder(locale='fr').build_url('/search/sandbox', {'query': 'a'})

        assert url.endswith('?query=a&locale=fr')

    def test_web_url(self):
        assert RequestBuilder().build_web_url('/oauth/authorize') == (
            'https://www.dropbox.com/1/oauth/authorize'
        )

    def test_headers(self):
        assert RequestBuilder.build_headers() == {}
        assert RequestBuilder.build_headers('text/plain') == {'Content-Type': 'text/plain'}
