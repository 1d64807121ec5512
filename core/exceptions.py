"""Custom exception hierarchy for the music gateway."""


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    status_code = 500


class ConfigurationError(GatewayError):
    """Raised when configuration is missing or invalid."""


class InvalidTargetError(GatewayError):
    """Raised when an audio target is not an allowed http(s) URL."""

    status_code = 400

    def __init__(self, target: str) -> None:
        super().__init__("Invalid target")
        self.target = target


class MissingParameterError(GatewayError):
    """Raised when a backend requires a query parameter the caller omitted.

    Attributes:
        parameter: Name of the missing query parameter
    """

    status_code = 400

    def __init__(self, parameter: str) -> None:
        super().__init__(f"Missing {parameter}")
        self.parameter = parameter


class UpstreamError(GatewayError):
    """Raised when an upstream provider cannot be reached or fails.

    Attributes:
        message: Error message
        provider: Upstream provider name (e.g., 'kugou', 'kuwo')
        url: Upstream URL that was attempted
    """

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.url = url


class UpstreamConnectionError(UpstreamError):
    """Raised when unable to connect to an upstream provider."""
