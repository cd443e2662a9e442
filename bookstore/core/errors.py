"""Error taxonomy shared by services and the HTTP layer.

Each error carries the status code the API boundary turns it into, so routes
raise domain errors and the exception handlers in ``bookstore.main`` do the
mapping in one place.
"""


class BookstoreError(Exception):
    """
    Base class for errors that map onto a client-facing status code.

    ``detail`` is the response body's ``detail`` value; it defaults to the
    message and may be any JSON-serializable payload.
    """

    status_code: int = 500

    def __init__(self, message: str, detail: object | None = None) -> None:
        self.message = message
        self.detail = message if detail is None else detail
        super().__init__(message)


class ValidationError(BookstoreError, ValueError):
    """
    Malformed or missing input, or a path/body id mismatch.

    Also a ValueError, so pydantic field validators may raise it directly.
    """

    status_code = 400


class AuthenticationError(BookstoreError):
    """Bad credentials, or a missing, invalid or expired token."""

    status_code = 401


class AuthorizationError(BookstoreError):
    """Valid identity without the role the route requires."""

    status_code = 403


class NotFoundError(BookstoreError):
    """No record matches the requested id."""

    status_code = 404


class PersistenceError(BookstoreError):
    """A store write affected no rows or the ORM raised."""

    status_code = 500


class ConfigurationError(Exception):
    """Required configuration (e.g. the JWT signing key) is missing. Fatal at startup."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
