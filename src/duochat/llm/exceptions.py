"""Error taxonomy for provider adapters.

Each error carries the HTTP status the API boundary answers with, so the
FastAPI handlers never need to know which adapter raised it.
"""


class ProviderError(Exception):
    """Base class for provider errors."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    def is_retryable(self) -> bool:
        """Override in subclasses to control retry behavior."""
        return False


class MissingCredentialError(ProviderError):
    """No API key configured and none supplied with the request."""


class ProviderAuthenticationError(ProviderError):
    """Upstream rejected the credential (HTTP 401)."""


class ProviderPermissionError(ProviderError):
    """Credential lacks access to the resource (HTTP 403)."""


class ProviderRateLimitError(ProviderError):
    """Upstream rate limit exceeded (HTTP 429, retryable)."""

    def is_retryable(self) -> bool:
        return True


class ProviderServerError(ProviderError):
    """Upstream server failure (HTTP 5xx, retryable)."""

    def is_retryable(self) -> bool:
        return True


class ProviderRequestError(ProviderError):
    """Any other failed request, including transport errors."""


class UnsupportedModelError(ProviderError):
    """Model id belongs to no known provider (strict routing only)."""

    def __init__(self, model: str):
        super().__init__(f"Unsupported model: {model}", status_code=400)
        self.model = model
