"""Custom exceptions for rscloud API interactions."""


class CloudError(Exception):
    """Base exception for rscloud."""

    pass


class ConfigError(CloudError):
    """Configuration related errors."""

    pass


class InvalidCredentials(ConfigError):
    """User id or API key missing."""

    def __init__(self, message: str = "Please provide valid API credentials") -> None:
        super().__init__(message)


class AuthenticationError(CloudError):
    """Authentication failures."""

    pass


class AuthExpired(AuthenticationError):
    """Token rejected again right after re-authenticating."""

    def __init__(self, message: str = "Token rejected after re-authentication") -> None:
        super().__init__(message)


class ParseError(CloudError):
    """Response body did not have the expected shape."""

    pass


class APIError(CloudError):
    """General API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize API error.

        Args:
            message: Error message
            status_code: HTTP status code if applicable
        """
        super().__init__(message)
        self.status_code = status_code


class BadRequest(APIError):
    """Malformed request (400)."""

    def __init__(self, code: int, message: str, details: str) -> None:
        """Initialize bad request error.

        Args:
            code: Error code reported by the API
            message: Error message reported by the API
            details: Error details reported by the API
        """
        super().__init__(f"Code: {code}. Message: {message}. Detail: {details}", status_code=400)
        self.code = code
        self.message = message
        self.details = details


class AccessDenied(APIError):
    """Access denied (403)."""

    def __init__(self, message: str = "Access is denied for the given request.") -> None:
        super().__init__(message, status_code=403)


class NotFound(APIError):
    """Nothing matches the request URI (404)."""

    def __init__(
        self, message: str = "The server has not found anything matching the Request URI."
    ) -> None:
        super().__init__(message, status_code=404)


class PayloadTooLarge(APIError):
    """Request entity too large (413)."""

    def __init__(
        self,
        message: str = (
            "The server is refusing to process a request because the request entity "
            "is larger than the server is willing or able to process."
        ),
    ) -> None:
        super().__init__(message, status_code=413)


class ServerError(APIError):
    """Internal server error (500)."""

    def __init__(
        self,
        message: str = (
            "The server encountered an unexpected condition which prevented it "
            "from fulfilling the request."
        ),
    ) -> None:
        super().__init__(message, status_code=500)


class TransportError(CloudError):
    """Network related errors."""

    pass


class RequestTimeout(TransportError):
    """Request timeout errors."""

    pass
