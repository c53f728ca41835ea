"""
JWT token adapter - Implements TokenService protocol with PyJWT.

Tokens carry {sub, email, iat, exp} and are signed with a process-wide
secret. Verification accepts only the configured algorithm, so tokens
signed with "none" or another algorithm are rejected as INVALID_TOKEN.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import jwt

from src.domain.ports import TokenClaims
from src.domain.results import ErrorCode, Failure, Ok, Result

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JwtTokenService:
    """
    Implements TokenService protocol via PyJWT.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl_seconds: int = 3600,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize token service.

        Args:
            secret: Signing key. Never logged.
            algorithm: JWS algorithm used to sign and the only one accepted
            ttl_seconds: Lifetime of issued tokens
            clock: Source of the issue time
        """
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock

    def __repr__(self) -> str:
        return f"JwtTokenService(algorithm={self._algorithm!r}, ttl={self._ttl})"

    def issue(self, claims: TokenClaims) -> str:
        """Sign claims into a JWT expiring ttl_seconds from now."""
        issued_at = self._clock()
        payload = {
            "sub": claims.subject,
            "email": claims.email,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Result[TokenClaims]:
        """
        Verify signature and expiry.

        Returns:
            Ok(claims), Failure(EXPIRED_TOKEN) for a correctly signed token
            past its expiry, Failure(INVALID_TOKEN) for anything else
        """
        try:
            data = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            return Failure(ErrorCode.EXPIRED_TOKEN)
        except jwt.InvalidTokenError as e:
            logger.debug("Token verification failed: %s", type(e).__name__)
            return Failure(ErrorCode.INVALID_TOKEN)

        email = data.get("email")
        if not isinstance(email, str):
            return Failure(ErrorCode.INVALID_TOKEN)
        return Ok(TokenClaims(subject=data["sub"], email=email))
