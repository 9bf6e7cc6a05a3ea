"""
Key/secret pairs used to identify actors during and after an OAuth handshake.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class TokenPair:
    """
    An OAuth token: either a request token or an access token.

    Both values are opaque strings; the only validation is that neither is
    empty.
    """
    key: str
    secret: str

    def __post_init__(self):
        if not self.key or not isinstance(self.key, str):
            raise ValueError("token key must be a non-empty string")
        if not self.secret or not isinstance(self.secret, str):
            raise ValueError("token secret must be a non-empty string")

    def __repr__(self) -> str:
        return f"TokenPair(key={self.key!r}, secret='***')"


@dataclass(frozen=True)
class Credentials:
    """Application consumer credentials ("app key" and "app secret")."""
    consumer_key: str
    consumer_secret: str

    def __post_init__(self):
        if not self.consumer_key or not self.consumer_secret:
            raise ValueError("consumer key and secret are required")

    def __repr__(self) -> str:
        return f"Credentials(consumer_key={self.consumer_key!r}, consumer_secret='***')"
