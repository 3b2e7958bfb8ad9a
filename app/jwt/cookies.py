from fastapi import Response

from app.core.config import Settings, settings as default_settings


class SessionCookie:
    """
    Session cookie settings
    - HTTP-only, SameSite=Lax, Secure only in production
    - max-age matches the token lifetime
    """
    PATH = "/"
    SAMESITE = "lax"
    HTTPONLY = True

    def __init__(self, settings: Settings = default_settings):
        self.name = settings.SESSION_COOKIE_NAME
        self.max_age = settings.SESSION_TTL_SECONDS
        self.secure = settings.is_production

    def set(self, response: Response, token: str) -> None:
        """
        Put the signed session token in the response cookie
        """
        response.set_cookie(
            key=self.name,
            value=token,
            httponly=self.HTTPONLY,
            secure=self.secure,
            samesite=self.SAMESITE,
            max_age=self.max_age,
            path=self.PATH,
        )

    def clear(self, response: Response) -> None:
        """
        Overwrite the cookie with an immediately expiring one
        """
        response.delete_cookie(
            self.name,
            path=self.PATH,
            secure=self.secure,
            httponly=self.HTTPONLY,
            samesite=self.SAMESITE,
        )

    def read(self, cookies: dict) -> str | None:
        return cookies.get(self.name)
