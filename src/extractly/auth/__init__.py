"""
JWT bearer-token authentication for Extractly.
"""

from .jwt_manager import JWTManager, parse_expires_in
from .middleware import Authenticator, require_token
from .models import (
    AuthenticationError,
    InvalidExpiryError,
    InvalidTokenError,
    MalformedTokenError,
    MissingTokenError,
    TokenData,
)

__all__ = [
    "JWTManager",
    "parse_expires_in",
    "Authenticator",
    "require_token",
    "AuthenticationError",
    "InvalidExpiryError",
    "InvalidTokenError",
    "MalformedTokenError",
    "MissingTokenError",
    "TokenData",
]
