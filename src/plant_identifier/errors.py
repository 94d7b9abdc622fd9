class ConfigError(ValueError):
    """Configuration is missing or invalid."""


class AuthError(RuntimeError):
    """Authentication or token exchange failed."""


class ProviderError(RuntimeError):
    """The generative AI provider answered with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Provider returned {status_code}")
        self.status_code = status_code
        self.body = body


class TransportError(RuntimeError):
    """The request to the provider could not be completed."""


class IdentificationFailed(RuntimeError):
    """User-facing failure reported by the identification client."""
