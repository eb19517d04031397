"""
Cross rate computation shared by providers quoting every currency against one base.
"""

from apps.money.domain.exceptions import RateProviderError, RateProviderErrorKind
from apps.money.domain.models import MAX_DECIMAL, Decimal, ExchangeRate, pow10

# Fractional digits kept when a division does not terminate.
MAX_RATE_PRECISION = 8


def divide(numerator: Decimal, denominator: Decimal) -> ExchangeRate:
    """
    Divide two decimals with integer arithmetic only.

    The quotient is truncated to MAX_RATE_PRECISION fractional digits, or fewer
    when its integer part is long enough to push it past MAX_DECIMAL.
    """
    if denominator.subunits == 0:
        raise RateProviderError(RateProviderErrorKind.UNEXPECTED_FORMAT, "exchange rate quote is zero")

    scaled_numerator = numerator.subunits * pow10(denominator.precision)
    scaled_denominator = denominator.subunits * pow10(numerator.precision)

    integer_digits = len(str(scaled_numerator // scaled_denominator).lstrip("0"))
    max_digits = len(str(MAX_DECIMAL)) - 1
    precision = max(0, min(MAX_RATE_PRECISION, max_digits - integer_digits))

    subunits = scaled_numerator * pow10(precision) // scaled_denominator
    return ExchangeRate.from_decimal(Decimal(subunits, precision).simplify())


def cross_rate(source: str, target: str, quotes: dict[str, Decimal], base: str) -> ExchangeRate:
    """
    Derive the source -> target rate from quotes expressed as "1 base = quote".

    Raises:
        RateProviderError(RATE_NOT_FOUND): a needed quote is missing
    """
    if source == target:
        return ExchangeRate(1, 0)

    if source != base and source not in quotes:
        raise RateProviderError(
            RateProviderErrorKind.RATE_NOT_FOUND,
            f"couldn't find the exchange rate for {source}",
        )
    if target != base and target not in quotes:
        raise RateProviderError(
            RateProviderErrorKind.RATE_NOT_FOUND,
            f"couldn't find the exchange rate for {target}",
        )

    if source == base:
        return ExchangeRate.from_decimal(quotes[target].simplify())
    if target == base:
        return divide(Decimal(1, 0), quotes[source])
    return divide(quotes[target], quotes[source])
