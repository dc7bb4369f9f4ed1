"""
utils/errors.py
---------------
Error types raised by the route handlers. Each one knows the HTTP status it
is answered with; the app factory registers the translation to JSON.
"""


class ApiError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message

    def to_dict(self):
        return {"error": self.message}


class ValidationError(ApiError):
    status_code = 400
    message = "Invalid request"


class AuthError(ApiError):
    status_code = 401
    message = "Unauthorized"


class ForbiddenError(ApiError):
    status_code = 403
    message = "Forbidden"


class NotFoundError(ApiError):
    status_code = 404
    message = "Not found"


class InternalError(ApiError):
    status_code = 500


class QueryError(ApiError):
    """A database call failed. `detail` carries the driver message for the logs."""

    status_code = 500
    message = "Database query failed"

    def __init__(self, detail):
        super().__init__()
        self.detail = detail

    def __str__(self):
        return self.detail
