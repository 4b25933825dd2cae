"""Custom exceptions for stockcalc."""


class StockCalcError(Exception):
    """Base exception for all stockcalc errors."""

    def __init__(self, message: str, *args: object) -> None:
        self.message = message
        super().__init__(message, *args)


class ConfigurationError(StockCalcError):
    """Required configuration is missing or invalid."""


class InvalidInputError(StockCalcError):
    """Caller supplied an unusable value (empty symbol, zero price, ...)."""


# Provider errors
class ProviderError(StockCalcError):
    """Base error for the quote provider layer."""


class MalformedRequestError(ProviderError):
    """Request URL could not be built. Never retried."""


class ProviderTransportError(ProviderError):
    """Network failure or timeout talking to the provider."""


class ProviderHTTPError(ProviderError):
    """Provider answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int, *args: object) -> None:
        self.status_code = status_code
        super().__init__(message, status_code, *args)


class ProviderAuthError(ProviderHTTPError):
    """Provider rejected the credentials (HTTP 401)."""


class ProviderRateLimitError(ProviderHTTPError):
    """Provider rate limit exceeded (HTTP 429)."""


class ProviderResponseError(ProviderError):
    """Provider body could not be decoded as JSON."""
