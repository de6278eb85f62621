"""Domain-level error types."""


class UpstreamUnavailableError(RuntimeError):
    """Raised when the object store or identity provider call fails."""


class OAuthExchangeError(RuntimeError):
    """Raised when the identity provider rejects an authorization response."""
