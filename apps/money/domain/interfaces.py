from abc import ABC, abstractmethod

from apps.money.domain.models import Currency, ExchangeRate


class BaseExchangeRateProvider(ABC):
    @abstractmethod
    def fetch_exchange_rate(self, source: Currency, target: Currency) -> ExchangeRate:
        """Return the rate from source to target, or raise RateProviderError."""
