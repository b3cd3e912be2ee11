"""Figma error taxonomy.

Every failure raised by the Figma services is a FigmaError. Only ServiceError
carries an HTTP status, so callers can branch on shape.
"""


class FigmaError(Exception):
    """Base exception for Figma errors."""

    pass


class CapabilityError(FigmaError):
    """Required network stack is not available in this environment."""

    pass


class ServiceError(FigmaError):
    """Figma API answered with a non-success HTTP status.

    Attributes:
        status: HTTP status code
        message: Status text reported by the API
    """

    def __init__(self, status: int, message: str = "Unknown error"):
        super().__init__(f"Figma API error {status}: {message}")
        self.status = status
        self.message = message


class TransportError(FigmaError):
    """Request never produced a response (DNS, proxy, TLS, timeout)."""

    pass


class UnknownError(FigmaError):
    """Any other unexpected failure while talking to Figma."""

    pass
