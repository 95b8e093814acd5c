"""
Bearer-token authentication for the FastAPI routes.
"""

from __future__ import annotations

import re
from typing import Optional

import structlog
from fastapi import Request

from extractly.observability.metrics import METRICS

from .jwt_manager import JWTManager
from .models import AuthenticationError, MalformedTokenError, MissingTokenError, TokenData

logger = structlog.get_logger(__name__)

_BEARER_PATTERN = re.compile(r"^Bearer\s+(\S+)\s*$", re.IGNORECASE)


class Authenticator:
    """
    Verifies the ``Authorization`` header of protected requests.

    When ``bypass`` is set every request is accepted without a token and
    ``authenticate`` returns ``None``.
    """

    def __init__(self, jwt_manager: JWTManager, bypass: bool = False):
        self.jwt_manager = jwt_manager
        self.bypass = bypass

    def authenticate(self, authorization: Optional[str]) -> Optional[TokenData]:
        """
        Validate a raw ``Authorization`` header value.

        Raises:
            AuthenticationError: On a missing, malformed, invalid or expired token.
        """
        if self.bypass:
            return None

        try:
            token = self._extract_bearer(authorization)
            return self.jwt_manager.verify_token(token)
        except AuthenticationError as e:
            METRICS["auth_failures"].inc()
            logger.info("Authentication failed", error=e.message)
            raise

    @staticmethod
    def _extract_bearer(authorization: Optional[str]) -> str:
        if not authorization or not authorization.strip():
            raise MissingTokenError()
        match = _BEARER_PATTERN.match(authorization.strip())
        if not match:
            raise MalformedTokenError()
        return match.group(1)


async def require_token(request: Request) -> Optional[TokenData]:
    """FastAPI dependency verifying the request's bearer token."""
    authenticator: Authenticator = request.app.state.context.authenticator
    return authenticator.authenticate(request.headers.get("Authorization"))
