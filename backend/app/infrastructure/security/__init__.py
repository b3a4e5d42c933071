"""
Security Infrastructure Module

Token signing/verification, password hashing and session cookies.
"""

from app.infrastructure.security.tokens import TokenClaims, TokenVerifier, get_token_verifier
from app.infrastructure.security.passwords import hash_password, verify_password
from app.infrastructure.security.cookies import clear_session_cookies, set_session_cookie

__all__ = [
    "TokenClaims",
    "TokenVerifier",
    "get_token_verifier",
    "hash_password",
    "verify_password",
    "clear_session_cookies",
    "set_session_cookie",
]
