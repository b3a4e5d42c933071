"""
Session cookie helpers.
"""

from fastapi import Response

from app.config.settings import Settings


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """
    Set the HttpOnly access token cookie on the response.

    Secure only in production (requires HTTPS).
    """
    response.set_cookie(
        key=settings.access_cookie_name,
        value=token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )


def clear_session_cookies(response: Response, settings: Settings) -> None:
    """Clear every session cookie from the response."""
    response.delete_cookie(key=settings.access_cookie_name, path="/")
    response.delete_cookie(key=settings.refresh_cookie_name, path="/")
