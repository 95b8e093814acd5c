"""
JWT token management for Extractly authentication.

Tokens are HMAC-signed with the shared secret from configuration; the same
primitive is used by the API, the login endpoint and the ``token`` CLI.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

import jwt
import structlog

from extractly.config.config import AuthConfig

from .models import InvalidExpiryError, InvalidTokenError, TokenData

logger = structlog.get_logger(__name__)

_EXPIRY_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*([a-z]*)\s*$", re.IGNORECASE)
# Seconds per unit; a bare number is seconds. A year is 365.25 days.
_EXPIRY_UNITS: Dict[str, float] = {
    alias: seconds
    for seconds, aliases in (
        (0.001, ("ms", "msec", "msecs", "millisecond", "milliseconds")),
        (1, ("", "s", "sec", "secs", "second", "seconds")),
        (60, ("m", "min", "mins", "minute", "minutes")),
        (3600, ("h", "hr", "hrs", "hour", "hours")),
        (86400, ("d", "day", "days")),
        (604800, ("w", "week", "weeks")),
        (31557600, ("y", "yr", "yrs", "year", "years")),
    )
    for alias in aliases
}


def parse_expires_in(value: Union[str, int]) -> timedelta:
    """
    Parse a token lifetime.

    Accepts integer seconds or strings such as ``"45s"``, ``"30m"``,
    ``"1.5h"``, ``"7d"``, ``"2 days"``, ``"2w"`` and ``"1y"``. A string
    without a unit counts seconds.

    Raises:
        InvalidExpiryError: If the value is not a positive duration.
    """
    if isinstance(value, bool):
        raise InvalidExpiryError(f"Invalid expiresIn value: {value!r}")
    if isinstance(value, int):
        delta = timedelta(seconds=value)
    else:
        match = _EXPIRY_PATTERN.match(value)
        if not match or match.group(2).lower() not in _EXPIRY_UNITS:
            raise InvalidExpiryError(f"Invalid expiresIn value: {value!r}")
        amount, unit = match.groups()
        delta = timedelta(seconds=float(amount) * _EXPIRY_UNITS[unit.lower()])
    if delta.total_seconds() <= 0:
        raise InvalidExpiryError(f"expiresIn must be positive: {value!r}")
    return delta


class JWTManager:
    """
    Signs and verifies bearer tokens.

    The payload always carries ``userId`` and ``iat``; ``exp`` is derived from
    the requested lifetime. Extra claims are passed through unchanged.
    """

    def __init__(self, settings: Optional[AuthConfig] = None):
        self.settings = settings or AuthConfig()

    def create_token(
        self,
        user_id: str = "default-user",
        expires_in: Union[str, int, None] = None,
        extra_claims: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Create a signed token for ``user_id``."""
        lifetime = parse_expires_in(expires_in if expires_in is not None else self.settings.default_expires_in)
        now = datetime.now(timezone.utc)

        payload: Dict[str, Any] = dict(extra_claims or {})
        payload.update(
            {
                "userId": user_id,
                "iat": now,
                "exp": now + lifetime,
            }
        )
        return jwt.encode(payload, self.settings.secret_key, algorithm=self.settings.algorithm)

    def verify_token(self, token: str) -> TokenData:
        """
        Verify and decode a token.

        Raises:
            InvalidTokenError: If the token is malformed, badly signed or expired.
        """
        try:
            payload = jwt.decode(
                token,
                self.settings.secret_key,
                algorithms=[self.settings.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise InvalidTokenError("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.info("Rejected invalid token", reason=str(e))
            raise InvalidTokenError(str(e))

        return TokenData(
            user_id=str(payload.get("userId", "")),
            claims=payload,
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc) if "iat" in payload else None,
        )
