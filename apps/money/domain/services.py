"""
Domain services - Core business logic.
Converts amounts between currencies with fixed-point arithmetic.
"""

import logging

from apps.money.application.dto import ConversionResultDTO
from apps.money.domain.exceptions import MoneyError, MoneyErrorKind, RateProviderError
from apps.money.domain.interfaces import BaseExchangeRateProvider
from apps.money.domain.models import (
    Amount,
    Currency,
    Decimal,
    ExchangeRate,
    multiply,
    new_amount,
    parse_currency,
    parse_decimal,
    pow10,
    truncate_divide,
)

logger = logging.getLogger(__name__)


class MoneyConversionService:
    """
    Domain service that converts an Amount into another Currency.

    Conversion is all-or-nothing:
    1. Fetch the rate from the injected provider (never retried)
    2. Multiply the quantity by the rate
    3. Rescale the product to the target precision, truncating extra digits
    4. Validate the result against the magnitude ceiling
    """

    @staticmethod
    def fetch_rate(
        source: Currency,
        target: Currency,
        rates: BaseExchangeRateProvider
    ) -> ExchangeRate:
        try:
            return rates.fetch_exchange_rate(source, target)
        except RateProviderError as e:
            logger.warning("Rate fetch failed for %s/%s: %s", source.code, target.code, e)
            raise MoneyError(
                MoneyErrorKind.RATE_FETCH_FAILED,
                f"failed to fetch exchange rate for {source.code} to {target.code}: {e}",
            ) from e

    @staticmethod
    def apply_exchange_rate(amount: Amount, to: Currency, rate: ExchangeRate) -> Amount:
        """
        Multiply amount by rate and express the product with the precision of `to`.

        Extra fractional digits are truncated, never rounded:
        3.14 * 2.52678 = 7.9340892 becomes 7.93.

        Raises:
            MoneyError: if the converted amount is not a valid Amount
        """
        product = multiply(amount.quantity, rate)

        if product.precision > to.precision:
            subunits = truncate_divide(product.subunits, pow10(product.precision - to.precision))
        else:
            subunits = product.subunits * pow10(to.precision - product.precision)

        converted = Amount(quantity=Decimal(subunits, to.precision), currency=to)
        try:
            converted.validate()
        except MoneyError as e:
            logger.warning("Converted amount %s rejected: %s", converted, e)
            raise MoneyError(e.kind, f"converted amount {converted} is invalid: {e}") from e
        return converted

    @staticmethod
    def convert(amount: Amount, to: Currency, rates: BaseExchangeRateProvider) -> Amount:
        """
        Convert an amount to another currency.

        Example:
            >>> usd = new_amount(parse_decimal("34.98"), parse_currency("USD"))
            >>> MoneyConversionService.convert(usd, parse_currency("EUR"), provider)
            Amount(quantity=Decimal(subunits=6996, precision=2), ...)
        """
        rate = MoneyConversionService.fetch_rate(amount.currency, to, rates)
        converted = MoneyConversionService.apply_exchange_rate(amount, to, rate)
        logger.info("Converted %s to %s at rate %s", amount, converted, rate)
        return converted

    @staticmethod
    def convert_amount(
        quantity: str,
        source_currency_code: str,
        exchanged_currency_code: str,
        rates: BaseExchangeRateProvider
    ) -> ConversionResultDTO:
        """
        Parse raw inputs and convert them.

        Args:
            quantity: Decimal text, e.g. "34.98"
            source_currency_code: Currency of the quantity (e.g. "USD")
            exchanged_currency_code: Target currency (e.g. "EUR")
            rates: Provider used to fetch the rate

        Returns:
            ConversionResultDTO with the parsed amount, the rate and the result

        Raises:
            MoneyError: on invalid input, rate failure or invalid result
        """
        source = parse_currency(source_currency_code)
        target = parse_currency(exchanged_currency_code)
        amount = new_amount(parse_decimal(quantity), source)

        rate = MoneyConversionService.fetch_rate(source, target, rates)
        converted = MoneyConversionService.apply_exchange_rate(amount, target, rate)
        logger.info("Converted %s to %s at rate %s", amount, converted, rate)

        return ConversionResultDTO(
            source_currency=source.code,
            exchanged_currency=target.code,
            amount=amount,
            rate=rate,
            converted_amount=converted,
        )
