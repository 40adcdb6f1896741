"""Exception hierarchy for the GS2 client.

Errors raised before a request leaves the process (missing parameters) and
errors reported by the server (HTTP status codes) share a common base so
callers can catch everything with a single ``except Gs2ClientError``.
"""


class Gs2ClientError(Exception):
    """Base exception for GS2 client errors."""

    pass


class MissingParameterError(Gs2ClientError, ValueError):
    """Raised when a required request parameter is absent or None."""

    def __init__(self, action: str, parameters: list[str]):
        names = ", ".join(parameters) if parameters else "request"
        super().__init__(f"{action}: missing required parameter(s): {names}")
        self.action = action
        self.parameters = parameters


class Gs2ConnectionError(Gs2ClientError):
    """Raised when connection to the GS2 endpoint fails."""

    pass


class Gs2APIError(Gs2ClientError):
    """Raised when the GS2 endpoint returns an error response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class BadRequestError(Gs2APIError):
    pass


class UnauthorizedError(Gs2APIError):
    pass


class QuotaExceededError(Gs2APIError):
    pass


class NotFoundError(Gs2APIError):
    pass


class ConflictError(Gs2APIError):
    """Raised on 409, e.g. when joining a gathering that is already full."""

    pass


class InternalServerError(Gs2APIError):
    pass


class BadGatewayError(Gs2APIError):
    pass


class ServiceUnavailableError(Gs2APIError):
    pass


class RequestTimeoutError(Gs2APIError):
    pass


STATUS_ERRORS: dict[int, type[Gs2APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    402: QuotaExceededError,
    404: NotFoundError,
    409: ConflictError,
    500: InternalServerError,
    502: BadGatewayError,
    503: ServiceUnavailableError,
    504: RequestTimeoutError,
}


def error_for_status(status_code: int, message: str) -> Gs2APIError:
    """Build the exception matching an HTTP error status."""
    error_class = STATUS_ERRORS.get(status_code, Gs2APIError)
    return error_class(message, status_code=status_code)
