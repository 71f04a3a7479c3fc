"""
Domain exceptions raised by the SQL builders and repositories.

Each exception carries the HTTP status the API layer responds with, so
routes never translate errors themselves. See the handler in main.py.
"""


class JoblyError(Exception):
    """Base exception for jobly errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(JoblyError):
    """Client input that cannot be processed."""

    status_code = 400


class NoDataError(BadRequestError):
    """Partial update called with an empty payload."""

    def __init__(self, message: str = "No data"):
        super().__init__(message)


class UnknownFilterError(BadRequestError):
    """Query parameter that is not a registered filter."""

    def __init__(self, key: str):
        super().__init__(f"{key} is an invalid filter type")
        self.key = key


class InvalidFilterValueError(BadRequestError):
    """Filter value that fails its type check."""

    def __init__(self, name: str, expected: str):
        super().__init__(f"{name} must be type {expected}")
        self.name = name
        self.expected = expected


class InvalidRangeError(BadRequestError):
    """Minimum bound greater than maximum bound."""


class DuplicateError(BadRequestError):
    """Create collided with an existing key."""


class NotFoundError(JoblyError):
    """Entity absent, or a filter matched nothing."""

    status_code = 404
