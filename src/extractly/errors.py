"""
Error taxonomy for Extractly.

Every error that reaches the HTTP layer carries the status code it maps to,
so the web handlers only need to serialize it.
"""

from __future__ import annotations

from typing import Any, Dict


class ExtractlyError(Exception):
    """Base exception for all request-level failures."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message}


class InvalidInputError(ExtractlyError):
    """Malformed URL or request body."""

    status_code = 400


class UnauthorizedError(ExtractlyError):
    """Missing, invalid or expired bearer token."""

    status_code = 401


class UpstreamTimeoutError(ExtractlyError):
    """The target site did not answer within the fetch timeout."""

    status_code = 408


class UpstreamUnreachableError(ExtractlyError):
    """DNS or connection failure towards the target site."""

    status_code = 503


class UpstreamHttpError(ExtractlyError):
    """The target site answered with a status outside 200-399."""

    def __init__(self, upstream_status: int) -> None:
        kind = "Client error" if upstream_status < 500 else "Server error"
        super().__init__(f"{kind}: HTTP {upstream_status}", status_code=upstream_status)
        self.upstream_status = upstream_status


class UnknownError(ExtractlyError):
    """Anything that does not fit the categories above."""

    status_code = 500
