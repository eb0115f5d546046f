"""
Exchange Errors

Failure taxonomy shared by all exchange clients.
"""


class ExchangeError(Exception):
    """Base class for exchange client failures."""
    pass


class InvalidResponseError(ExchangeError):
    """Exchange returned something that could not be interpreted."""
    pass


class NetworkError(ExchangeError):
    """Connection dropped or timed out."""
    pass


class MissingCredentialsError(ExchangeError):
    """API key or secret not configured."""
    pass


class RateLimitExceededError(ExchangeError):
    """Exchange throttled the request."""
    pass


class ServerError(ExchangeError):
    """Exchange-side failure, or an operation refused by this build."""
    pass


class InvalidConfigurationError(ExchangeError):
    """Request or client parameters are invalid (e.g. non-positive quantity)."""
    pass


class SecurityValidationError(ExchangeError):
    """Credential or request failed a security check."""
    pass
