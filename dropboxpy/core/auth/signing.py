"""OAuth 1.0 PLAINTEXT signing."""
from typing import Optional
from urllib.parse import quote

from .tokens import Credentials, TokenPair


def percent_encode(value: str) -> str:
    """Percent-encode everything except unreserved characters and '/'."""
    return quote(value, safe='/')


def build_signature(consumer_secret: str, token: Optional[TokenPair] = None) -> str:
    """PLAINTEXT signature: encoded consumer secret, '&', encoded token secret."""
    signature = percent_encode(consumer_secret) + '&'
    if token is not None:
        signature += percent_encode(token.secret)
    return signature


def build_auth_header(credentials: Credentials, token: Optional[TokenPair] = None) -> str:
    """
    Build the Authorization header value.

    The secrets are sent as is (PLAINTEXT method); confidentiality relies on
    TLS. The parameter order and quoting are part of the wire format.

    Args:
        credentials: Consumer credentials
        token: Request or access token, None for the request-token call

    Returns:
        Header value starting with 'OAuth '
    """
    header = (
        'OAuth oauth_version="1.0", oauth_signature_method="PLAINTEXT", '
        f'oauth_consumer_key="{percent_encode(credentials.consumer_key)}", '
    )
    if token is not None:
        header += f'oauth_token="{percent_encode(token.key)}", '
    header += f'oauth_signature="{build_signature(credentials.consumer_secret, token)}"'
    return header
