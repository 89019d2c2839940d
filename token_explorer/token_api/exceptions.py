class TokenApiError(Exception):
    pass


class InvalidRequest(TokenApiError):
    """Required input missing or malformed. Raised before any network call."""


class UpstreamHttpError(TokenApiError):
    """Non-2xx response relayed from the Token API."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API request failed with status {status_code}: {body}")

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class TransportError(TokenApiError):
    """Network, DNS or timeout failure before any HTTP status was received."""
