"""
Authentication models and data types for Extractly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from extractly.errors import InvalidInputError, UnauthorizedError


class AuthenticationError(UnauthorizedError):
    """Base exception for authentication errors."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class MissingTokenError(AuthenticationError):
    """Raised when no Authorization header was sent."""

    def __init__(self) -> None:
        super().__init__("Missing authentication token")


class MalformedTokenError(AuthenticationError):
    """Raised when the Authorization header does not carry a bearer token."""

    def __init__(self) -> None:
        super().__init__("Invalid authentication token format")


class InvalidTokenError(AuthenticationError):
    """Raised when a token is invalid or expired."""

    def __init__(self, reason: str | None = None) -> None:
        super().__init__("Invalid or expired authentication token")
        self.reason = reason


class InvalidExpiryError(InvalidInputError):
    """Raised for an unparseable token lifetime such as ``"7x"``."""


@dataclass
class TokenData:
    """Claims carried by a verified token."""

    user_id: str
    claims: Dict[str, Any] = field(default_factory=dict)
    exp: Optional[datetime] = None
    iat: Optional[datetime] = None

    def to_payload(self) -> Dict[str, Any]:
        """Claims as returned by the verify endpoint."""
        return dict(self.claims)
