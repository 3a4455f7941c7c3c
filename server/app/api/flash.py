"""One-time flash notifications carried across a redirect in cookies."""
from __future__ import annotations

from urllib.parse import quote, unquote

from fastapi import Request, Response

from app.schemas.outcome import Flash

FLASH_COOKIES = {
    "message": "flash_message",
    "error": "flash_error",
}


def set_flash(response: Response, flash: Flash, max_age: int) -> None:
    """Attach ``flash`` to a redirect response."""
    response.set_cookie(
        key=FLASH_COOKIES[flash.kind],
        value=quote(flash.text),
        max_age=max_age,
        path="/",
        httponly=True,
        samesite="lax",
    )


def read_flashes(request: Request) -> dict[str, str | None]:
    """Return pending flashes keyed by kind; missing kinds map to None."""
    flashes: dict[str, str | None] = {}
    for kind, cookie_name in FLASH_COOKIES.items():
        value = request.cookies.get(cookie_name)
        flashes[kind] = unquote(value) if value else None
    return flashes


def clear_flashes(request: Request, response: Response) -> None:
    """Expire the flash cookies the request carried so they are shown once."""
    for cookie_name in FLASH_COOKIES.values():
        if cookie_name in request.cookies:
            response.delete_cookie(cookie_name, path="/", httponly=True, samesite="lax")
