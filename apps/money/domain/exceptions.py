"""
Error types of the money domain.
Each error carries a kind from a closed enumeration plus a human readable message.
"""

from enum import Enum


class MoneyErrorKind(str, Enum):
    INVALID_DECIMAL = "invalid decimal"
    TOO_LARGE = "too large"
    INVALID_CURRENCY_CODE = "invalid currency code"
    TOO_PRECISE = "too precise"
    RATE_FETCH_FAILED = "exchange rate unavailable"


class MoneyError(ValueError):
    """Raised by parsing, amount construction and conversion."""

    def __init__(self, kind: MoneyErrorKind, message: str | None = None):
        self.kind = kind
        self.message = message or kind.value
        super().__init__(self.message)


class RateProviderErrorKind(str, Enum):
    CALLING_SERVER = "error calling server"
    TIMEOUT = "timed out when waiting for response"
    UNEXPECTED_FORMAT = "unexpected response format"
    RATE_NOT_FOUND = "couldn't find the requested exchange rate"
    CLIENT_SIDE = "client-side error"
    SERVER_SIDE = "server-side error"
    UNKNOWN_STATUS_CODE = "unknown status code"
    NOT_CONFIGURED = "provider not configured"


class RateProviderError(Exception):
    """Raised by exchange rate providers when no rate can be produced."""

    def __init__(self, kind: RateProviderErrorKind, message: str | None = None):
        self.kind = kind
        self.message = message or kind.value
        super().__init__(self.message)
