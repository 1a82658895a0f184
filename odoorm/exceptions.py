"""odoorm client exceptions."""

from typing import Any


class OdoormError(Exception):
    """Base exception for odoorm errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        original_error: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.original_error = original_error


class ConfigurationError(OdoormError):
    """Missing or invalid client configuration."""

    pass


class ConnectionError(OdoormError):
    """Failed to connect to the Odoo server."""

    pass


class TimeoutError(ConnectionError):
    """The Odoo server did not answer in time."""

    pass


class APIError(OdoormError):
    """The Odoo server answered with an error."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        data: dict[str, Any] | None = None,
        original_error: BaseException | None = None,
    ):
        super().__init__(message, code, original_error)
        self.data = data


class AuthenticationError(APIError):
    """Invalid or missing API key."""

    pass


class AccessDeniedError(APIError):
    """The API key may not access the requested model or record."""

    pass


class NotFoundError(APIError):
    """Record or endpoint does not exist."""

    pass


class ValidationError(APIError):
    """The server rejected the submitted values."""

    pass


class InvalidArgumentError(OdoormError, ValueError):
    """Query conditions of an unsupported shape."""

    pass


class InvalidConditionError(InvalidArgumentError):
    """A condition string that does not read as ``field operator value``."""

    pass


class NotPersistedError(OdoormError):
    """Remote operation on a record that has no id yet."""

    pass


class RecordDestroyedError(OdoormError):
    """Mutation of a record that has been deleted on the server."""

    pass
