"""
Domain errors raised by the link service.

Each error carries the HTTP status it maps to and the message shown to
the client. The HTTP layer translates them in one place (see main.py),
so the service never imports FastAPI.
"""


class LinkError(Exception):
    """Base class for all link service errors"""

    status_code = 500
    default_message = "server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(LinkError):
    """Client sent a malformed url, code or body"""

    status_code = 400
    default_message = "invalid request"


class NotFoundError(LinkError):
    """No link exists for the code (or the code is reserved)"""

    status_code = 404
    default_message = "not found"


class ConflictError(LinkError):
    """The code is already taken"""

    status_code = 409
    default_message = "code already exists"


class StoreError(LinkError):
    """The database failed for a reason other than a duplicate code"""

    status_code = 500
    default_message = "server error"
