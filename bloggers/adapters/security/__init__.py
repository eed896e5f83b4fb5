"""Security adapters - TokenSigner implementations."""

from .jwt import JwtTokenSigner

__all__ = ["JwtTokenSigner"]
