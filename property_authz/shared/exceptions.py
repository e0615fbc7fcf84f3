# property_authz/shared/exceptions.py
from fastapi import HTTPException, status


# Authentication Exceptions
class InvalidTokenError(HTTPException):
    def __init__(self, detail: str = "Missing or invalid token") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class AuthNotConfiguredError(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Token verification not configured",
        )


# Authorization Exceptions
class NotAuthorizedError(HTTPException):
    """Every denial maps here; the denial reason stays in the audit log."""

    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


class AuthorizationUnavailableError(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authorization service unavailable",
        )


# Validation / Request Exceptions
class InvalidDataError(HTTPException):
    def __init__(self, message: str = "Invalid request data") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
