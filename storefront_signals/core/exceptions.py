"""Custom exception classes for storefront signals."""


class StorefrontSignalsException(Exception):
    """Base exception for all storefront signals errors."""

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(self.message)


class TransportError(StorefrontSignalsException):
    """Raised when a storefront request fails or returns a non-2xx status."""

    def __init__(self, url: str, message: str, status_code: int | None = None):
        self.url = url
        self.status_code = status_code
        super().__init__(f"Request to {url} failed: {message}")


class PayloadParseError(StorefrontSignalsException):
    """Raised when a storefront payload cannot be decoded."""

    def __init__(self, source: str, message: str):
        super().__init__(f"Could not parse {source}: {message}")
