"""
Mock provider for development and tests.
Serves fixed rates so conversions work without network access.
"""

from apps.money.domain.interfaces import BaseExchangeRateProvider
from apps.money.domain.models import Currency, Decimal, ExchangeRate
from apps.money.infrastructure.providers.cross_rate import cross_rate


class MockProvider(BaseExchangeRateProvider):
    """
    Mock provider quoting a handful of currencies against EUR.
    Useful for:
    - Testing without external API calls
    - Development without network access
    """

    BASE_CURRENCY = "EUR"

    # 1 EUR = rate CURRENCY (approximate real-world values)
    BASE_RATES = {
        "USD": Decimal(108, 2),
        "GBP": Decimal(85, 2),
        "CHF": Decimal(95, 2),
        "JPY": Decimal(162, 0),
        "CNY": Decimal(78, 1),
        "KWD": Decimal(332, 3),
    }

    def fetch_exchange_rate(self, source: Currency, target: Currency) -> ExchangeRate:
        return cross_rate(source.code, target.code, self.BASE_RATES, self.BASE_CURRENCY)
