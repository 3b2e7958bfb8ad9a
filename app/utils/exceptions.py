from typing import Optional


class ApiError(Exception):
    """
    Root of the API exceptions
    - every custom API exception derives from this class
    - translated to a JSON error response by the handler registered in app.main
    """
    def __init__(self, message: str):
        """
        - message: text returned to the caller
        """
        self.message = message
        super().__init__(message)


class BadRequestError(ApiError):
    """400 Bad Request"""
    pass


class InvalidOperationError(BadRequestError):
    """400 - well-formed request the domain refuses (self-follow, ...)"""
    pass


class NoChangeError(InvalidOperationError):
    """400 - update that would leave the value unchanged"""
    pass


class UnauthorizedError(ApiError):
    """401 Unauthorized"""
    pass


class InvalidTokenError(UnauthorizedError):
    """401 - session token with a bad signature, malformed or expired"""
    pass


class InvalidCredentialsError(UnauthorizedError):
    """
    401 - sign-in mismatch
    - same message for unknown user and wrong password
    """
    def __init__(self, message: str = "Invalid username/email or password."):
        super().__init__(message)


class IncorrectPasswordError(UnauthorizedError):
    """401 - old password does not match on password change"""
    def __init__(self, message: str = "Incorrect old password."):
        super().__init__(message)


class ForbiddenError(ApiError):
    """403 Forbidden"""
    pass


class NotFoundError(ApiError):
    """404 Not Found"""
    def __init__(self, message: str = "Resource not found!"):
        super().__init__(message)


class ConflictError(ApiError):
    """409 Conflict"""
    pass


class DuplicateFieldError(ConflictError):
    """409 - unique user field already taken"""
    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"{field} already exists!")


class DuplicateFavoriteError(ConflictError):
    def __init__(self, message: str = "This tweet is already on your favorites!"):
        super().__init__(message)


class DuplicateFollowError(ConflictError):
    def __init__(self, message: str = "You're already following this user!"):
        super().__init__(message)
