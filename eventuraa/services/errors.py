"""
Service-layer errors.

Routers do not catch these; main.py maps each kind to a status code and
renders {"detail": message, "error": kind}.
"""


class ServiceError(Exception):
    kind = "error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(ServiceError):
    kind = "unauthenticated"
    status_code = 401


class Forbidden(ServiceError):
    kind = "forbidden"
    status_code = 403


class NotFound(ServiceError):
    kind = "not_found"
    status_code = 404


class InvalidState(ServiceError):
    kind = "invalid_state"
    status_code = 409


class ValidationFailed(ServiceError):
    kind = "validation_error"
    status_code = 400


class Unavailable(ServiceError):
    kind = "unavailable"
    status_code = 503
