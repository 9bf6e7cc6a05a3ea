"""
OAuth session.

AuthSession holds the consumer credentials and the request and access
tokens. It drives the three-legged handshake, signs every outbound request
and can be saved to and restored from a YAML blob.

Example:
    >>> session = AuthSession('app-key', 'app-secret')
    >>> url = session.build_authorize_url()
    >>> # send the user to url, wait for approval
    >>> session.exchange_for_access_token()
    >>> blob = session.serialize()
"""
from typing import Optional, Dict, Any, List
from urllib.parse import parse_qs

import yaml

from .signing import build_auth_header, percent_encode
from .tokens import Credentials, TokenPair
from ..api.config import APIConfig
from ..api.request import RequestBuilder
from ..api.transport import Transport, RequestsTransport, HTTPResponse
from ..exceptions import AuthProtocolError, NotAuthorizedError
from ..logging import get_logger

logger = get_logger('auth')


class AuthSession:
    """
    Authentication session for one application and at most one user.

    Lifecycle: unauthenticated -> request token cached -> access token
    acquired once the user approved the request token out of band. A session
    restored from an access token skips the handshake.
    """

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        locale: Optional[str] = None,
        transport: Optional[Transport] = None,
        config: Optional[APIConfig] = None
    ):
        """
        Initialize session.

        Args:
            consumer_key: Application key
            consumer_secret: Application secret
            locale: Locale passed to the authorize page
            transport: HTTP transport (defaults to RequestsTransport)
            config: API configuration
        """
        self._credentials = Credentials(consumer_key, consumer_secret)
        self._request_token: Optional[TokenPair] = None
        self._access_token: Optional[TokenPair] = None
        self._locale = locale
        self._config = config or APIConfig.default()
        self._transport = transport or RequestsTransport(self._config)
        self._builder = RequestBuilder(self._config)

    @classmethod
    def from_access_token(
        cls,
        consumer_key: str,
        consumer_secret: str,
        access_key: str,
        access_secret: str,
        **kwargs
    ) -> 'AuthSession':
        """Create an already authorized session from a stored access token."""
        session = cls(consumer_key, consumer_secret, **kwargs)
        session.set_access_token(access_key, access_secret)
        return session

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def request_token(self) -> Optional[TokenPair]:
        """Request token, or None if one hasn't been acquired yet."""
        return self._request_token

    @property
    def access_token(self) -> Optional[TokenPair]:
        """Access token, or None if one hasn't been acquired yet."""
        return self._access_token

    @property
    def locale(self) -> Optional[str]:
        return self._locale

    @property
    def config(self) -> APIConfig:
        return self._config

    @property
    def transport(self) -> Transport:
        return self._transport

    def set_request_token(self, key: str, secret: str) -> None:
        """Use a previously saved request token."""
        self._request_token = TokenPair(key, secret)

    def set_access_token(self, key: str, secret: str) -> None:
        """Use a previously saved access token."""
        self._access_token = TokenPair(key, secret)

    def clear_access_token(self) -> None:
        self._access_token = None

    # Signing

    def sign(self, token: Optional[TokenPair] = None) -> str:
        """
        Build the Authorization header value for a request.

        Args:
            token: Token to sign with; None only for the request-token call

        Returns:
            OAuth PLAINTEXT header value
        """
        return build_auth_header(self._credentials, token)

    # Handshake

    def acquire_request_token(self) -> TokenPair:
        """
        Return the request token, fetching it from the server if needed.

        Only the first call performs a network request.

        Raises:
            AuthProtocolError: If the server rejects the call or the
                response is malformed
        """
        if self._request_token is None:
            logger.info("Requesting OAuth request token")
            self._request_token = self._fetch_token(
                '/oauth/request_token',
                None,
                "Error getting request token.  Is your app key and secret correctly set?"
            )
        return self._request_token

    def build_authorize_url(
        self,
        callback: Optional[str] = None,
        locale: Optional[str] = None
    ) -> str:
        """
        URL the user must visit to approve this application.

        Args:
            callback: URL the user is redirected to after approval
            locale: Locale for the authorize page (defaults to session locale)

        Returns:
            Authorize URL on the web host
        """
        token = self.acquire_request_token()

        path = f"/oauth/authorize?oauth_token={percent_encode(token.key)}"
        if callback:
            path += f"&oauth_callback={percent_encode(callback)}"
        locale = locale or self._locale
        if locale:
            path += f"&locale={percent_encode(locale)}"

        return self._builder.build_web_url(path)

    def exchange_for_access_token(self) -> TokenPair:
        """
        Return the access token, exchanging the request token if needed.

        Fails unless the user approved the request token at the authorize URL.

        Raises:
            AuthProtocolError: If no request token exists, the handshake was
                not approved or the response is malformed
        """
        if self._access_token is not None:
            return self._access_token

        if self._request_token is None:
            raise AuthProtocolError(
                "No request token. You must set this or get an authorize url first."
            )

        logger.info("Exchanging request token for access token")
        self._access_token = self._fetch_token(
            '/oauth/access_token',
            self._request_token,
            "Couldn't get access token."
        )
        return self._access_token

    def _fetch_token(
        self,
        endpoint: str,
        token: Optional[TokenPair],
        error_prefix: str
    ) -> TokenPair:
        """Signed GET against a handshake endpoint, parsed as a token pair."""
        url = self._builder.build_url(endpoint)
        response = self._transport.request(
            'GET', url, headers={'Authorization': self.sign(token)}
        )

        if not response.ok:
            raise AuthProtocolError(
                f"{error_prefix}  Server returned {response.status}: {response.reason}.",
                response=response
            )

        parts = parse_qs(response.text, keep_blank_values=True)
        for name in ('oauth_token', 'oauth_token_secret'):
            values = parts.get(name, [])
            if len(values) != 1 or not values[0]:
                raise AuthProtocolError(
                    f"Invalid response from {endpoint}: missing \"{name}\" parameter: {response.text}",
                    response=response
                )

        return TokenPair(parts['oauth_token'][0], parts['oauth_token_secret'][0])

    # Authorization state

    def is_authorized(self) -> bool:
        """True if this session holds an access token."""
        return self._access_token is not None

    def require_authorized(self) -> None:
        """
        Raises:
            NotAuthorizedError: If no access token exists
        """
        if not self.is_authorized():
            raise NotAuthorizedError("Session does not yet have an access token")

    # Signed API requests

    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        body: Any = None
    ) -> HTTPResponse:
        """
        Perform a request signed with the access token.

        Args:
            method: HTTP method
            url: Absolute URL
            headers: Extra headers
            body: Request body (bytes, file object or form dict)

        Returns:
            Raw HTTPResponse

        Raises:
            NotAuthorizedError: If no access token exists
            TransportError: If the request could not be sent
        """
        self.require_authorized()
        request_headers = dict(headers or {})
        request_headers['Authorization'] = self.sign(self._access_token)
        if isinstance(body, dict):
            body = {k: v for k, v in body.items() if v is not None}
        return self._transport.request(method, url, headers=request_headers, body=body)

    # Persistence

    def serialize(self) -> str:
        """
        Serialize the session to YAML.

        The request token is acquired first, so serializing a fresh session
        performs a network round-trip. Layout (most specific first):
        ``[access_secret, access_key, request_secret, request_key,
        consumer_secret, consumer_key]``, the access pair only when present.

        Returns:
            YAML document
        """
        fields: List[str] = []
        if self._access_token is not None:
            fields += [self._access_token.secret, self._access_token.key]

        request_token = self.acquire_request_token()
        fields += [request_token.secret, request_token.key]
        fields += [self._credentials.consumer_secret, self._credentials.consumer_key]

        return yaml.safe_dump(fields, explicit_start=True, default_flow_style=False)

    @classmethod
    def deserialize(cls, blob: str, **kwargs) -> 'AuthSession':
        """
        Restore a session written by serialize().

        Fields are consumed from the end of the sequence; the access token is
        restored only when fields remain after the mandatory four.

        Args:
            blob: YAML document
            **kwargs: Passed to the constructor (locale, transport, config)

        Returns:
            Restored AuthSession

        Raises:
            ValueError: If the blob is not a sequence of 4 or 6 strings
        """
        fields = yaml.safe_load(blob)
        if (
            not isinstance(fields, list)
            or len(fields) not in (4, 6)
            or not all(isinstance(item, str) for item in fields)
        ):
            raise ValueError("Serialized session must be a list of 4 or 6 strings")

        session = cls(fields.pop(), fields.pop(), **kwargs)
        session.set_request_token(fields.pop(), fields.pop())
        if fields:
            session.set_access_token(fields.pop(), fields.pop())
        return session

    def __repr__(self) -> str:
        state = 'authorized' if self.is_authorized() else 'unauthorized'
        return f"<AuthSession {self._credentials.consumer_key!r} {state}>"
