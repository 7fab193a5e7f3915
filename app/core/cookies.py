"""Session cookies: the only place that reads or writes cookies."""

from typing import TYPE_CHECKING

from fastapi import Request, Response

from app.core.tokens import ACTIVATION_TOKEN_MINUTES

if TYPE_CHECKING:
    from app.core.config import Settings


class SessionCookieManager:
    """
    HTTP-only cookies scoped to the API root.

    The refresh cookie carries the refresh token (max-age = refresh TTL). The
    registration cookie carries a short-lived activation token between
    /auth/register and /auth/email/activate.
    """

    def __init__(self, settings: "Settings") -> None:
        self.refresh_cookie_name = settings.REFRESH_COOKIE_NAME
        self.registration_cookie_name = settings.REGISTRATION_COOKIE_NAME
        self.path = settings.API_V1_PREFIX or "/"
        self.secure = settings.COOKIE_SECURE
        self.samesite = settings.COOKIE_SAMESITE
        self.refresh_max_age = settings.refresh_token_max_age

    def set_refresh_cookie(self, response: Response, token: str) -> None:
        self._set(response, self.refresh_cookie_name, token, self.refresh_max_age)

    def clear_refresh_cookie(self, response: Response) -> None:
        """Empty value with immediate expiry. Does not invalidate the token itself."""
        self._clear(response, self.refresh_cookie_name)

    def read_refresh_cookie(self, request: Request) -> str | None:
        return request.cookies.get(self.refresh_cookie_name) or None

    def set_registration_cookie(self, response: Response, token: str) -> None:
        self._set(response, self.registration_cookie_name, token, ACTIVATION_TOKEN_MINUTES * 60)

    def clear_registration_cookie(self, response: Response) -> None:
        self._clear(response, self.registration_cookie_name)

    def read_registration_cookie(self, request: Request) -> str | None:
        return request.cookies.get(self.registration_cookie_name) or None

    def _set(self, response: Response, key: str, value: str, max_age: int) -> None:
        response.set_cookie(
            key=key,
            value=value,
            max_age=max_age,
            path=self.path,
            httponly=True,
            secure=self.secure,
            samesite=self.samesite,
        )

    def _clear(self, response: Response, key: str) -> None:
        response.delete_cookie(
            key=key,
            path=self.path,
            httponly=True,
            secure=self.secure,
            samesite=self.samesite,
        )
