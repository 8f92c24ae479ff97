# app/errors.py
"""
Error taxonomy for the reviews API.

Every error carries the HTTP status it maps to and a message that is safe to
show to the storefront. The exception handler in app.main turns them into the
`{"ok": false, "error": ...}` envelope.
"""


class ReviewsAPIError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthorizationError(ReviewsAPIError):
    """No shop could be resolved for the request."""
    status_code = 401


class ValidationError(ReviewsAPIError):
    """A required field is missing or malformed. Caller-correctable, never retried."""
    status_code = 400


class MethodError(ReviewsAPIError):
    status_code = 405


class InternalError(ReviewsAPIError):
    """Store failure or unexpected exception. The message must stay generic."""
    status_code = 500
