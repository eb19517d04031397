"""
Data Transfer Objects for the application layer.
DTOs decouple internal domain models from external API contracts.
"""

from dataclasses import dataclass

from apps.money.domain.models import Amount, ExchangeRate


@dataclass
class ConversionRequestDTO:
    """Request DTO for currency conversion."""
    source_currency: str
    exchanged_currency: str
    amount: str


@dataclass
class ConversionResultDTO:
    """Result DTO for currency conversion."""
    source_currency: str
    exchanged_currency: str
    amount: Amount
    rate: ExchangeRate
    converted_amount: Amount

    def as_dict(self) -> dict[str, str]:
        return {
            "source_currency": self.source_currency,
            "exchanged_currency": self.exchanged_currency,
            "amount": str(self.amount.quantity),
            "rate": str(self.rate),
            "converted_amount": str(self.converted_amount.quantity),
        }
