"""
Pure domain value objects (POPOs).
No dependency on Django or the network.

Monetary quantities are fixed-point numbers: an integer number of subunits
scaled by a power of ten. No float is ever involved.
"""

from dataclasses import dataclass

from apps.money.domain.exceptions import MoneyError, MoneyErrorKind

# Largest number of subunits a Decimal may carry.
MAX_DECIMAL = 10**12

# Currencies whose precision is not 2. Everything else defaults to 2.
CURRENCY_PRECISIONS: dict[str, int] = {
    "IRR": 0,
    "MGA": 1,
    "MRU": 1,
    "CNY": 1,
    "VND": 1,
    "BHD": 3,
    "IQD": 3,
    "KWD": 3,
    "LYD": 3,
    "OMR": 3,
    "TND": 3,
}
DEFAULT_CURRENCY_PRECISION = 2


def pow10(power: int) -> int:
    return 10**power


def truncate_divide(numerator: int, divisor: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(divisor)
    return quotient if (numerator < 0) == (divisor < 0) else -quotient


def _format_fixed_point(subunits: int, precision: int) -> str:
    if precision == 0:
        return str(subunits)
    sign = "-" if subunits < 0 else ""
    integer_part, fractional_part = divmod(abs(subunits), pow10(precision))
    return f"{sign}{integer_part}.{fractional_part:0{precision}d}"


@dataclass(frozen=True)
class Decimal:
    """
    Fixed-point decimal: value = subunits / 10**precision.

    The constructor keeps what it is given; parse_decimal() and multiply()
    always hand out the simplified form.
    """

    subunits: int
    precision: int

    def simplify(self) -> "Decimal":
        """Strip trailing zeros of the fractional part: {150, 2} -> {15, 1}."""
        subunits, precision = self.subunits, self.precision
        while precision > 0 and subunits % 10 == 0:
            subunits //= 10
            precision -= 1
        return Decimal(subunits, precision)

    def __str__(self) -> str:
        return _format_fixed_point(self.subunits, self.precision)


@dataclass(frozen=True)
class ExchangeRate:
    """Multiplicative factor from one unit of a source currency to a target currency."""

    subunits: int
    precision: int

    @classmethod
    def from_decimal(cls, value: Decimal) -> "ExchangeRate":
        return cls(value.subunits, value.precision)

    def as_decimal(self) -> Decimal:
        return Decimal(self.subunits, self.precision)

    def __str__(self) -> str:
        return _format_fixed_point(self.subunits, self.precision)


@dataclass(frozen=True)
class Currency:

    code: str
    precision: int

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True)
class Amount:
    """A quantity of money in a given currency, e.g. 123.45 EUR."""

    quantity: Decimal
    currency: Currency

    def validate(self) -> None:
        if self.quantity.subunits > MAX_DECIMAL:
            raise MoneyError(
                MoneyErrorKind.TOO_LARGE,
                f"amount {self} exceeds the maximum supported value",
            )
        if self.quantity.precision > self.currency.precision:
            raise MoneyError(
                MoneyErrorKind.TOO_PRECISE,
                f"amount {self} is too precise for {self.currency.code}",
            )

    def __str__(self) -> str:
        return f"{self.quantity} {self.currency.code}"


def _is_digits(text: str) -> bool:
    return text.isascii() and text.isdigit()


def parse_decimal(value: str) -> Decimal:
    """
    Parse text such as "1.52", "150" or ".25" into a simplified Decimal.

    Raises:
        MoneyError(INVALID_DECIMAL): empty text, several points, or anything
            other than ASCII digits around the point.
        MoneyError(TOO_LARGE): more than MAX_DECIMAL subunits.
    """
    integer_part, _, fractional_part = value.partition(".")

    if not integer_part and not fractional_part:
        raise MoneyError(MoneyErrorKind.INVALID_DECIMAL, f"invalid decimal: {value!r}")
    for part in (integer_part, fractional_part):
        if part and not _is_digits(part):
            raise MoneyError(MoneyErrorKind.INVALID_DECIMAL, f"invalid decimal: {value!r}")

    digits = (integer_part + fractional_part).lstrip("0")
    if len(digits) > len(str(MAX_DECIMAL)):
        raise MoneyError(MoneyErrorKind.TOO_LARGE, f"decimal {value!r} is too large")

    subunits = int(digits or "0")
    if subunits > MAX_DECIMAL:
        raise MoneyError(MoneyErrorKind.TOO_LARGE, f"decimal {value!r} is too large")

    return Decimal(subunits, len(fractional_part)).simplify()


def parse_currency(code: str) -> Currency:
    if len(code) != 3:
        raise MoneyError(
            MoneyErrorKind.INVALID_CURRENCY_CODE,
            f"invalid currency code {code!r}: must be 3 letters",
        )
    return Currency(code, CURRENCY_PRECISIONS.get(code, DEFAULT_CURRENCY_PRECISION))


def new_amount(quantity: Decimal, currency: Currency) -> Amount:
    """
    Bind a quantity to a currency.

    A quantity less precise than the currency is widened (1.5 USD becomes
    1.50 USD). A quantity more precise than the currency is rejected.
    """
    if quantity.precision > currency.precision:
        raise MoneyError(
            MoneyErrorKind.TOO_PRECISE,
            f"{quantity} is too precise for {currency.code}",
        )
    if quantity.precision < currency.precision:
        quantity = Decimal(
            quantity.subunits * pow10(currency.precision - quantity.precision),
            currency.precision,
        )
    return Amount(quantity=quantity, currency=currency)


def multiply(quantity: Decimal, rate: ExchangeRate) -> Decimal:
    # (a * 10^-p) * (b * 10^-q) = (a * b) * 10^-(p + q)
    product = Decimal(quantity.subunits * rate.subunits, quantity.precision + rate.precision)
    return product.simplify()
