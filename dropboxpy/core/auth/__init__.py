"""
Authentication module.

OAuth 1.0 (PLAINTEXT) session handling: handshake, signing and persistence.
"""
from .tokens import Credentials, TokenPair
from .signing import build_auth_header, build_signature, percent_encode
from .session import AuthSession

__all__ = [
    'AuthSession',
    'Credentials',
    'TokenPair',
    'build_auth_header',
    'build_signature',
    'percent_encode',
]
