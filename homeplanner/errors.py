"""
Domain errors raised by use cases

Every error carries the HTTP status it maps to; the handlers registered in
homeplanner.main turn them into a uniform {"message": ...} body.
"""


class DomainError(Exception):
    """Base class for errors a client can act on"""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Missing or malformed required field"""

    status_code = 400


class InUseError(DomainError):
    """Delete blocked because other records still reference the row"""

    status_code = 400


class UnauthorizedError(DomainError):
    """Missing/invalid/expired token, or the token's user no longer exists"""

    status_code = 401


class NotFoundError(DomainError):
    """Record absent or not owned by the caller"""

    status_code = 404


class ConflictError(DomainError):
    """Duplicate unique label or email"""

    status_code = 409
