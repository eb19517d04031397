"""
Provider Registry - Maps ProviderName enum to adapter classes.
This is the glue between configuration and the actual implementation.
"""

import logging

from django.conf import settings
from django.db import models

from apps.money.domain.exceptions import RateProviderError, RateProviderErrorKind
from apps.money.domain.interfaces import BaseExchangeRateProvider
from apps.money.infrastructure.providers.ecb import ECBProvider
from apps.money.infrastructure.providers.mock import MockProvider

logger = logging.getLogger(__name__)


class ProviderName(models.TextChoices):
    """
    Enum with available providers.
    To add a new provider:
    1. Add an entry here
    2. Implement the BaseExchangeRateProvider interface
    3. Register in PROVIDER_REGISTRY below
    """

    ECB = "ecb", "European Central Bank"
    MOCK = "mock", "Mock"


# Registry: Maps ProviderName enum to the corresponding adapter class
PROVIDER_REGISTRY: dict[str, type[BaseExchangeRateProvider]] = {
    ProviderName.ECB: ECBProvider,
    ProviderName.MOCK: MockProvider,
}


def get_provider_instance(provider_name: str) -> BaseExchangeRateProvider | None:
    """
    Get an instance of a provider by its name.

    Args:
        provider_name: The provider name from ProviderName enum

    Returns:
        Instance of the provider adapter, or None if not found
    """
    provider_class = PROVIDER_REGISTRY.get(provider_name)

    if provider_class is None:
        logger.warning("Provider '%s' not found in registry", provider_name)
        return None

    return provider_class()


def get_default_provider() -> BaseExchangeRateProvider:
    """
    Get the provider configured by the MONEY_RATES_PROVIDER setting.

    Raises:
        RateProviderError(NOT_CONFIGURED): if the setting names no registered provider
    """
    provider = get_provider_instance(settings.MONEY_RATES_PROVIDER)
    if provider is None:
        raise RateProviderError(
            RateProviderErrorKind.NOT_CONFIGURED,
            f"MONEY_RATES_PROVIDER={settings.MONEY_RATES_PROVIDER!r} is not a registered provider",
        )
    return provider
