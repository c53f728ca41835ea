"""Session token adapters."""

from .jwt_service import JwtTokenService

__all__ = ["JwtTokenService"]
