import logging
import xml.etree.ElementTree as ET

import requests
from django.conf import settings

from apps.money.domain.exceptions import (
    MoneyError,
    RateProviderError,
    RateProviderErrorKind,
)
from apps.money.domain.interfaces import BaseExchangeRateProvider
from apps.money.domain.models import Currency, Decimal, ExchangeRate, parse_decimal
from apps.money.infrastructure.providers.cross_rate import cross_rate

logger = logging.getLogger(__name__)

# Every quote of the feed reads "1 EUR = rate CURRENCY".
ECB_BASE_CURRENCY = "EUR"


class ECBProvider(BaseExchangeRateProvider):
    """
    European Central Bank provider.
    Reads today's euro reference rates from the daily XML feed and derives cross rates.
    """

    def __init__(self, rates_url: str | None = None, timeout: float | None = None):
        self.rates_url = rates_url or settings.ECB_RATES_URL
        self.timeout = timeout if timeout is not None else settings.ECB_TIMEOUT_SECONDS

    def fetch_exchange_rate(self, source: Currency, target: Currency) -> ExchangeRate:
        """
        Fetch today's rate from source to target.

        Args:
            source: Currency being converted (e.g. USD)
            target: Currency converted into (e.g. RON)

        Returns:
            ExchangeRate such that 1 source = rate target

        Raises:
            RateProviderError: on timeout, network error, bad status code,
                malformed feed or unknown currency
        """
        # Feed format: <gesmes:Envelope><Cube><Cube time="..."><Cube currency="USD" rate="1.0823"/>...
        try:
            response = requests.get(self.rates_url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.warning("Timeout calling ECB for %s/%s: %s", source.code, target.code, e)
            raise RateProviderError(
                RateProviderErrorKind.TIMEOUT,
                f"ECB client: timed out when waiting for response: {e}",
            ) from e
        except requests.exceptions.RequestException as e:
            logger.warning("Error calling ECB for %s/%s: %s", source.code, target.code, e)
            raise RateProviderError(
                RateProviderErrorKind.CALLING_SERVER,
                f"ECB client: error calling server: {e}",
            ) from e

        check_status_code(response.status_code)

        rate = read_rate_from_response(source.code, target.code, response.content)
        logger.debug("ECB rate %s/%s = %s", source.code, target.code, rate)
        return rate


def check_status_code(status_code: int) -> None:
    if status_code == 200:
        return
    if 400 <= status_code < 500:
        kind = RateProviderErrorKind.CLIENT_SIDE
    elif 500 <= status_code < 600:
        kind = RateProviderErrorKind.SERVER_SIDE
    else:
        kind = RateProviderErrorKind.UNKNOWN_STATUS_CODE
    raise RateProviderError(kind, f"ECB client: {kind.value}, status code: {status_code}")


def parse_quotes(content: bytes | str) -> dict[str, Decimal]:
    """Collect the currency -> rate quotes of an ECB feed."""
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise RateProviderError(
            RateProviderErrorKind.UNEXPECTED_FORMAT,
            f"ECB client: unexpected response format: {e}",
        ) from e

    quotes: dict[str, Decimal] = {}
    for cube in root.iter():
        currency = cube.get("currency")
        rate = cube.get("rate")
        if currency is None or rate is None:
            continue
        try:
            quotes[currency] = parse_decimal(rate)
        except MoneyError as e:
            raise RateProviderError(
                RateProviderErrorKind.UNEXPECTED_FORMAT,
                f"ECB client: invalid rate {rate!r} for {currency}",
            ) from e

    if not quotes:
        raise RateProviderError(
            RateProviderErrorKind.UNEXPECTED_FORMAT,
            "ECB client: response contains no exchange rates",
        )
    return quotes


def read_rate_from_response(source: str, target: str, content: bytes | str) -> ExchangeRate:
    if source == target:
        return ExchangeRate(1, 0)
    return cross_rate(source, target, parse_quotes(content), ECB_BASE_CURRENCY)
