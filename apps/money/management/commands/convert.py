from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from apps.money.domain.exceptions import MoneyError
from apps.money.domain.services import MoneyConversionService
from apps.money.infrastructure.providers.ecb import ECBProvider
from apps.money.infrastructure.providers.registry import ProviderName, get_provider_instance


class Command(BaseCommand):
    help = 'Convert an amount of money from one currency to another'

    def add_arguments(self, parser):
        parser.add_argument('amount', type=str, help='Amount to convert, e.g. 34.98')
        parser.add_argument('source_currency', type=str, help='Currency of the amount, e.g. USD')
        parser.add_argument('exchanged_currency', type=str, help='Target currency, e.g. EUR')
        parser.add_argument(
            '--provider',
            dest='provider',
            choices=ProviderName.values,
            help='Rate provider to use (defaults to the MONEY_RATES_PROVIDER setting)'
        )
        parser.add_argument(
            '--timeout',
            dest='timeout',
            type=float,
            help='Timeout in seconds for the ECB request'
        )

    def handle(self, **options):
        provider_name = options['provider'] or settings.MONEY_RATES_PROVIDER

        if provider_name == ProviderName.ECB:
            provider = ECBProvider(timeout=options['timeout'])
        else:
            provider = get_provider_instance(provider_name)
        if provider is None:
            raise CommandError(f"Unknown rate provider '{provider_name}'")

        try:
            result = MoneyConversionService.convert_amount(
                options['amount'],
                options['source_currency'],
                options['exchanged_currency'],
                provider,
            )
        except MoneyError as e:
            raise CommandError(f"Conversion failed: {e}")

        self.stdout.write(
            self.style.SUCCESS(
                f"{result.amount} = {result.converted_amount} (rate {result.rate})"
            )
        )
