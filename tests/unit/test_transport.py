"""Tests for RequestsTransport."""
from unittest.mock import Mock

import pytest
import requests

from dropboxpy.core.api import APIConfig, HTTPResponse, RequestsTransport, SSLConfig, Transport
from dropboxpy.core.exceptions import TransportError


@pytest.fixture
def http_session():
    session = Mock(spec=requests.Session)
    response = Mock()
    response.status_code = 200
    response.content = b'{"ok": true}'
    response.headers = {'Content-Type': 'application/json'}
    response.reason = 'OK'
    session.request.return_value = response
    return session


class TestRequestsTransport:
    """Test suite for RequestsTransport."""

    def test_satisfies_protocol(self, http_session):
        assert isinstance(RequestsTransport(session=http_session), Transport)

    def test_request(self, http_session):
        """Test the response is converted and transport options applied."""
        transport = RequestsTransport(session=http_session)

        response = transport.request(
            'PUT', 'https://api-content.dropbox.com:443/1/chunked_upload',
            headers={'Authorization': 'OAuth x'}, body=b'abc'
        )

        assert response.status == 200
        assert response.body == b'{"ok": true}'
        assert response.headers['content-type'] == 'application/json'
        http_session.request.assert_called_once_with(
            'PUT',
            'https://api-content.dropbox.com:443/1/chunked_upload',
            headers={'Authorization': 'OAuth x'},
            data=b'abc',
            verify=True,
            timeout=(30.0, 120.0),
            allow_redirects=False
        )

    def test_config_applied(self, http_session):
        config = APIConfig(ssl=SSLConfig(ca_file='/etc/ssl/dropbox.pem'))
        transport = RequestsTransport(config, session=http_session)

        transport.request('GET', 'https://api.dropbox.com:443/1/account/info')

        assert http_session.request.call_args.kwargs['verify'] == '/etc/ssl/dropbox.pem'

    def test_connection_error(self, http_session):
        http_session.request.side_effect = requests.exceptions.ConnectionError('refused')
        transport = RequestsTransport(session=http_session)

        with pytest.raises(TransportError, match='refused') as exc_info:
            transport.request('GET', 'https://api.dropbox.com:443/1/account/info')

        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)

    def test_timeout(self, http_session):
        http_session.request.side_effect = requests.exceptions.ReadTimeout('timed out')

        with pytest.raises(TransportError):
            RequestsTransport(session=http_session).request('GET', 'https://api.dropbox.com/')

    def test_ssl_error(self, http_session):
        """Test certificate failures name the host."""
        http_session.request.side_effect = requests.exceptions.SSLError('bad cert')

        with pytest.raises(TransportError, match='SSL error connecting to api.dropbox.com:443'):
            RequestsTransport(session=http_session).request('GET', 'https://api.dropbox.com:443/1/x')

    def test_context_manager_closes(self, http_session):
        with RequestsTransport(session=http_session):
            pass

        http_session.close.assert_called_once()


class TestHTTPResponse:
    """Test suite for HTTPResponse."""

    def test_ok(self):
        assert HTTPResponse(status=204).ok
        assert not HTTPResponse(status=302).ok

    def test_headers_case_insensitive(self):
        response = HTTPResponse(status=200, headers={'X-Dropbox-Metadata': '{}'})

        assert response.headers['x-dropbox-metadata'] == '{}'

    def test_str(self):
        assert str(HTTPResponse(status=404, reason='Not Found')) == '404 Not Found'
