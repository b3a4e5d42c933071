"""
Access Token Verifier

Stateless HS256 JWT issuing and verification. The verifier is built
from an explicit ``Settings`` object and never touches storage, which
keeps the user access check free of database round-trips.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import jwt

from app.config.settings import Settings, get_settings
from app.infrastructure.exceptions import InvalidTokenError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenClaims:
    """Identity extracted from a verified token."""
    user_id: int


class TokenVerifier:
    """Signs and verifies access tokens with the configured secret."""

    def __init__(self, settings: Settings):
        self._secret = settings.jwt_secret
        self._algorithm = settings.jwt_algorithm
        self._ttl = timedelta(minutes=settings.access_token_expire_minutes)

    def issue(self, user_id: int, now: Optional[datetime] = None) -> str:
        """Create a signed access token for ``user_id``."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: Optional[str]) -> TokenClaims:
        """
        Verify a token and extract its identity claim.

        Raises:
            InvalidTokenError: token missing, expired, tampered with, or
                without a usable ``sub`` claim
        """
        if not token:
            raise InvalidTokenError("Missing access token")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired", original_error=e)
        except jwt.InvalidTokenError as e:
            logger.debug("JWT verification failed: %s", e)
            raise InvalidTokenError("Invalid or unverifiable token", original_error=e)

        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise InvalidTokenError("Invalid token: malformed user ID", original_error=e)

        return TokenClaims(user_id=user_id)


@lru_cache
def get_token_verifier() -> TokenVerifier:
    """Process-wide verifier built from the cached settings."""
    return TokenVerifier(get_settings())
